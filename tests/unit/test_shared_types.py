"""Unit tests for wire types shared with the backend."""

import pytest
from pydantic import ValidationError

from lms_client.shared.llm import (
    ChatMessage,
    LLMChatPredictionConfig,
    LLMCompletionPredictionConfig,
    LLMPredictionStats,
    model_specifier_adapter,
    structured_setting_adapter,
)
from lms_client.shared.load_config import LLMLoadModelConfig
from lms_client.shared.processor import (
    CitationSource,
    StatusStepState,
    preprocessor_update_adapter,
)
from lms_client.shared.retrieval import RetrievalFileHandle, RetrievalResult


class TestPredictionConfig:
    """Tests for prediction config models."""

    def test_accepts_camel_and_snake_case(self) -> None:
        """Test that both spellings populate the same field."""
        camel = LLMCompletionPredictionConfig.model_validate({"maxPredictedTokens": 10})
        snake = LLMCompletionPredictionConfig(max_predicted_tokens=10)

        assert camel == snake
        assert snake.to_wire() == {"maxPredictedTokens": 10}

    def test_max_predicted_tokens_false(self) -> None:
        """Test that False disables the token limit."""
        config = LLMCompletionPredictionConfig.model_validate({"maxPredictedTokens": False})
        assert config.to_wire() == {"maxPredictedTokens": False}

    def test_max_predicted_tokens_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            LLMCompletionPredictionConfig.model_validate({"maxPredictedTokens": -5})

    def test_completion_config_has_no_prompt_template(self) -> None:
        """Test that prompt template fields only exist for chat predictions."""
        with pytest.raises(ValidationError):
            LLMCompletionPredictionConfig.model_validate({"inputPrefix": ">"})

        chat = LLMChatPredictionConfig.model_validate({"inputPrefix": ">"})
        assert chat.input_prefix == ">"

    def test_context_overflow_policy(self) -> None:
        config = LLMCompletionPredictionConfig.model_validate({"contextOverflowPolicy": "rollingWindow"})
        assert config.context_overflow_policy == "rollingWindow"

        with pytest.raises(ValidationError):
            LLMCompletionPredictionConfig.model_validate({"contextOverflowPolicy": "wrap"})


class TestSpecifiersAndSettings:
    """Tests for discriminated unions."""

    def test_query_specifier(self) -> None:
        specifier = model_specifier_adapter.validate_python(
            {"type": "query", "query": {"path": "lmstudio/m.gguf"}}
        )
        assert specifier.to_wire() == {"type": "query", "query": {"path": "lmstudio/m.gguf"}}

    def test_instance_reference_specifier(self) -> None:
        specifier = model_specifier_adapter.validate_python(
            {"type": "instanceReference", "instanceReference": "abc"}
        )
        assert specifier.instance_reference == "abc"

    def test_unknown_specifier_type(self) -> None:
        with pytest.raises(ValidationError):
            model_specifier_adapter.validate_python({"type": "path", "path": "x"})

    def test_structured_none(self) -> None:
        setting = structured_setting_adapter.validate_python({"type": "none"})
        assert setting.to_wire() == {"type": "none"}


class TestInboundTypes:
    """Tests for types produced by the backend."""

    def test_stats_keep_unknown_fields(self) -> None:
        """Test that new backend fields do not break parsing."""
        stats = LLMPredictionStats.model_validate(
            {"stopReason": "eosFound", "tokensPerSecond": 42.5, "draftTokensCount": 3}
        )

        assert stats.stop_reason == "eosFound"
        assert stats.tokens_per_second == 42.5

    def test_chat_message_rejects_extra(self) -> None:
        with pytest.raises(ValidationError):
            ChatMessage.model_validate({"role": "user", "content": "hi", "images": []})


class TestLoadModelConfig:
    """Tests for LLMLoadModelConfig."""

    def test_gpu_offload_ratio(self) -> None:
        """Test numeric and named offload ratios."""
        numeric = LLMLoadModelConfig.model_validate(
            {"gpuOffload": {"ratio": 0.5, "mainGpu": 0, "tensorSplit": [1, 1]}}
        )
        named = LLMLoadModelConfig.model_validate(
            {"gpuOffload": {"ratio": "off", "mainGpu": 0, "tensorSplit": []}}
        )

        assert numeric.gpu_offload.ratio == 0.5
        assert named.gpu_offload.ratio == "off"

    def test_gpu_offload_ratio_out_of_range(self) -> None:
        with pytest.raises(ValidationError):
            LLMLoadModelConfig.model_validate(
                {"gpuOffload": {"ratio": 1.5, "mainGpu": 0, "tensorSplit": []}}
            )

    def test_kv_cache_alias(self) -> None:
        """Test the wire spelling of the fp16 KV cache flag."""
        config = LLMLoadModelConfig(use_fp16_for_kv_cache=True)
        assert config.to_wire() == {"useFp16ForKVCache": True}


class TestPreprocessorUpdates:
    """Tests for preprocessor update parsing."""

    def test_parse_status_update(self) -> None:
        update = preprocessor_update_adapter.validate_python(
            {"type": "status.update", "id": "x-1", "state": {"status": "done", "text": "ok"}}
        )
        assert update.state == StatusStepState(status="done", text="ok")

    def test_parse_debug_block(self) -> None:
        update = preprocessor_update_adapter.validate_python(
            {"type": "debugInfoBlock.create", "id": "x-2", "debugInfo": "hello"}
        )
        assert update.debug_info == "hello"


class TestRetrievalResult:
    """Tests for retrieval results."""

    RESULT = {
        "entries": [
            {
                "content": "Draft from 2022.",
                "score": 0.41,
                "source": {"identifier": "f-2", "name": "notes.txt", "sizeBytes": 120, "type": "text/plain"},
            },
            {
                "content": "Published March 2023.",
                "score": 0.87,
                "source": {"identifier": "f-1", "name": "report.pdf", "type": "application/pdf"},
            },
        ]
    }

    def test_parse_entries(self) -> None:
        """Test parsing the backend's camelCase retrieval payload."""
        result = RetrievalResult.model_validate(self.RESULT)

        assert len(result.entries) == 2
        assert result.entries[0].source.size_bytes == 120
        assert result.entries[1].source.size_bytes is None

    def test_top_orders_by_score(self) -> None:
        """Test selecting the best entries."""
        result = RetrievalResult.model_validate(self.RESULT)

        assert [entry.source.name for entry in result.top(1)] == ["report.pdf"]
        assert len(result.top(5)) == 2

    def test_entry_to_citation_source(self) -> None:
        """Test that an entry can feed a citation block."""
        entry = RetrievalResult.model_validate(self.RESULT).entries[1]

        assert entry.to_citation_source() == CitationSource(file_name="report.pdf")

    def test_unknown_file_type_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RetrievalFileHandle.model_validate({"identifier": "x", "name": "a.bin", "type": "binary"})
