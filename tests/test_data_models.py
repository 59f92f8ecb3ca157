"""Tests for configuration values, results and metric derivation."""

import dataclasses
import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from whisper_bench import (
    BenchmarkResult,
    InvalidConfigurationError,
    ModelConfig,
    TranscriptionResult,
    TranscriptionSegment,
    calculate_real_time_factor,
)
from whisper_bench.data_models import COMPUTE_TYPES, DEVICES, MODEL_SIZES


class TestModelConfig:
    """Test ModelConfig validation."""

    def test_default_config(self):
        """Test the default configuration is medium/auto/float16."""
        config = ModelConfig()

        assert config.model_size == "medium"
        assert config.device == "auto"
        assert config.compute_type == "float16"
        config.validate()

    def test_valid_config(self):
        """Test a valid configuration passes validation."""
        ModelConfig("base", "auto", "float16").validate()

    def test_construction_does_not_validate(self):
        """Test invalid values can be constructed and are only rejected by validate()."""
        config = ModelConfig("invalid", "auto", "float16")

        assert config.model_size == "invalid"
        with pytest.raises(InvalidConfigurationError):
            config.validate()

    def test_invalid_model_size(self):
        """Test invalid model size is rejected."""
        with pytest.raises(InvalidConfigurationError, match="Invalid model size: invalid"):
            ModelConfig("invalid", "auto", "float16").validate()

    def test_invalid_device(self):
        """Test invalid device is rejected."""
        with pytest.raises(InvalidConfigurationError, match="Invalid device: invalid"):
            ModelConfig("base", "invalid", "float16").validate()

    def test_invalid_compute_type(self):
        """Test invalid compute type is rejected."""
        with pytest.raises(InvalidConfigurationError, match="Invalid compute type: invalid"):
            ModelConfig("base", "auto", "invalid").validate()

    def test_first_invalid_field_is_reported(self):
        """Test only the first invalid field (in field order) is reported."""
        with pytest.raises(InvalidConfigurationError) as exc_info:
            ModelConfig("huge", "gpu", "int4").validate()

        assert "model size" in str(exc_info.value)
        assert "device" not in str(exc_info.value)

    def test_device_reported_before_compute_type(self):
        with pytest.raises(InvalidConfigurationError, match="Invalid device: gpu"):
            ModelConfig("base", "gpu", "int4").validate()

    def test_invalid_configuration_is_value_error(self):
        """Test InvalidConfigurationError can be caught as ValueError."""
        with pytest.raises(ValueError):
            ModelConfig("base", "auto", "bfloat16").validate()

    def test_config_is_immutable(self):
        """Test configs cannot be modified after creation."""
        config = ModelConfig("base", "cpu", "int8")

        with pytest.raises(dataclasses.FrozenInstanceError):
            config.device = "cuda"

    def test_label(self):
        assert ModelConfig("small", "mps", "float32").label == "small/mps/float32"

    @given(
        model_size=st.sampled_from(MODEL_SIZES),
        device=st.sampled_from(DEVICES),
        compute_type=st.sampled_from(COMPUTE_TYPES),
    )
    def test_all_enumerated_values_validate(self, model_size, device, compute_type):
        """Property: every combination of enumerated values is valid."""
        ModelConfig(model_size, device, compute_type).validate()

    @given(
        model_size=st.one_of(st.sampled_from(MODEL_SIZES), st.text(max_size=10)),
        device=st.one_of(st.sampled_from(DEVICES), st.text(max_size=10)),
        compute_type=st.one_of(st.sampled_from(COMPUTE_TYPES), st.text(max_size=10)),
    )
    def test_validates_iff_all_fields_enumerated(self, model_size, device, compute_type):
        """Property: validate() succeeds exactly when every field is enumerated."""
        config = ModelConfig(model_size, device, compute_type)
        expected_valid = (
            model_size in MODEL_SIZES
            and device in DEVICES
            and compute_type in COMPUTE_TYPES
        )

        if expected_valid:
            config.validate()
        else:
            with pytest.raises(InvalidConfigurationError):
                config.validate()


class TestRealTimeFactor:
    """Test real-time factor calculation."""

    def test_positive_time(self):
        assert calculate_real_time_factor(30.0, 2.0) == 15.0

    def test_zero_time(self):
        """Test zero processing time yields 0 instead of dividing by zero."""
        assert calculate_real_time_factor(30.0, 0.0) == 0.0

    def test_negative_time(self):
        assert calculate_real_time_factor(30.0, -1.0) == 0.0

    @given(
        duration=st.floats(min_value=0.0, max_value=1e6),
        processing_time=st.one_of(
            st.floats(min_value=1e-3, max_value=1e6),
            st.floats(min_value=-1e6, max_value=0.0),
        ),
    )
    def test_never_infinite_or_nan(self, duration, processing_time):
        """Property: the factor is always finite and follows the definition."""
        rtf = calculate_real_time_factor(duration, processing_time)

        assert math.isfinite(rtf)
        if processing_time > 0:
            assert rtf == duration / processing_time
        else:
            assert rtf == 0.0

    def test_result_records_time_and_factor(self):
        """Test TranscriptionResult derives its factor from the measured time."""
        result = TranscriptionResult(language="en", language_probability=0.9, duration=60.0)

        result.calculate_real_time_factor(4.0)

        assert result.transcription_time == 4.0
        assert result.real_time_factor == 15.0

    def test_result_zero_time(self):
        result = TranscriptionResult(language="en", language_probability=0.9, duration=60.0)

        result.calculate_real_time_factor(0.0)

        assert result.real_time_factor == 0.0


class TestBenchmarkResult:
    """Test BenchmarkResult derivation from a transcription."""

    def _transcription(self):
        return TranscriptionResult(
            language="en",
            language_probability=0.99,
            duration=30.0,
            segments=[
                TranscriptionSegment(0.0, 10.0, "one", 0.0),
                TranscriptionSegment(10.0, 20.0, "two", 0.0),
                TranscriptionSegment(20.0, 30.0, "three", 0.0),
            ],
            full_text="one two three",
            transcription_time=2.0,
            real_time_factor=15.0,
        )

    def test_from_transcription(self):
        """Test fields are copied from the config and the transcription."""
        config = ModelConfig("base", "mps", "float16")

        record = BenchmarkResult.from_transcription(config, self._transcription())

        assert record.model_size == "base"
        assert record.device == "mps"
        assert record.compute_type == "float16"
        assert record.audio_duration == 30.0
        assert record.transcription_time == 2.0
        assert record.real_time_factor == 15.0
        assert record.segments_count == 3

    def test_placeholders_unset(self):
        """Test memory and accuracy placeholders stay None."""
        record = BenchmarkResult.from_transcription(
            ModelConfig("base", "cpu", "int8"), self._transcription()
        )

        assert record.memory_usage_mb is None
        assert record.accuracy_score is None

    def test_empty_segments(self):
        transcription = TranscriptionResult(language="en", language_probability=0.5, duration=1.0)

        record = BenchmarkResult.from_transcription(ModelConfig(), transcription)

        assert record.segments_count == 0

    def test_to_dict_is_flat(self):
        record = BenchmarkResult.from_transcription(ModelConfig(), self._transcription())

        data = record.to_dict()

        assert list(data) == [
            "model_size",
            "device",
            "compute_type",
            "audio_duration",
            "transcription_time",
            "real_time_factor",
            "memory_usage_mb",
            "accuracy_score",
            "segments_count",
        ]
        assert all(not isinstance(v, (dict, list)) for v in data.values())
