"""Model load configuration forwarded to the backend."""

from typing import Annotated, Literal

from pydantic import Field

from .base import WireModel

# 0 offloads nothing to the GPU, 1 offloads every layer that can be offloaded.
LLMLlamaAccelerationOffloadRatio = (
    Annotated[float, Field(ge=0, le=1)] | Literal["max", "off"]
)


class LLMLlamaAccelerationSetting(WireModel):
    """Settings related to offloading work to the GPU."""

    ratio: LLMLlamaAccelerationOffloadRatio
    main_gpu: int
    tensor_split: list[int]


class LLMLoadModelConfig(WireModel):
    """Configuration used when loading a model.

    Attributes:
        gpu_offload: How much of the model's work goes to the GPU.
        context_length: Context size in tokens, prompts and responses included.
        rope_frequency_base: RoPE frequency base override.
        rope_frequency_scale: RoPE frequency scale override.
        eval_batch_size: Prompt evaluation batch size.
        flash_attention: Enable flash attention.
        keep_model_in_memory: Keep the model resident in system memory.
        seed: Random seed.
        use_fp16_for_kv_cache: Store the KV cache in fp16.
        try_mmap: Memory-map the weights when possible.
        num_experts: Number of experts to use for MoE models.
    """

    gpu_offload: LLMLlamaAccelerationSetting | None = None
    context_length: Annotated[int, Field(ge=1)] | None = None
    rope_frequency_base: float | None = None
    rope_frequency_scale: float | None = None
    eval_batch_size: Annotated[int, Field(ge=1)] | None = None
    flash_attention: bool | None = None
    keep_model_in_memory: bool | None = None
    seed: int | None = None
    use_fp16_for_kv_cache: bool | None = Field(default=None, alias="useFp16ForKVCache")
    try_mmap: bool | None = None
    num_experts: int | None = None


__all__ = [
    "LLMLlamaAccelerationOffloadRatio",
    "LLMLlamaAccelerationSetting",
    "LLMLoadModelConfig",
]
