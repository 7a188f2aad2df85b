"""Well-known model ids and run-path resolution.

Centralises model-id handling so the client doesn't need to duplicate the
catalog prefix logic.
"""

from __future__ import annotations

CATALOG_PREFIX = "@cf/"

# Chat models
MODEL_LLAMA_4_SCOUT_17B = "@cf/meta/llama-4-scout-17b-16e-instruct"
MODEL_LLAMA_3_8B = "@cf/meta/llama-3-8b-instruct"
MODEL_LLAMA_3_70B = "@cf/meta/llama-3-70b-instruct"
MODEL_MISTRAL_7B = "@cf/mistral/mistral-7b-instruct-v0.1"
MODEL_CODE_LLAMA_7B = "@cf/meta/code-llama-7b-instruct"
MODEL_QWEN3_30B_A3B = "@cf/qwen/qwen3-30b-a3b-fp8"

# Image generation models
MODEL_STABLE_DIFFUSION_XL = "@cf/stabilityai/stable-diffusion-xl-base-1.0"
MODEL_DREAMSHAPER_8 = "@cf/lykon/dreamshaper-8-lcm"

# Text-to-speech models
MODEL_SPEECHT5 = "@cf/microsoft/speecht5-tts"

# Embedding models
MODEL_BGE_BASE = "@cf/baai/bge-base-en-v1.5"
MODEL_BGE_LARGE = "@cf/baai/bge-large-en-v1.5"

# Translation models
MODEL_M2M100 = "@cf/meta/m2m100-1.2b"


def resolve_model_path(model: str) -> str:
    """Return the catalog path for *model*, adding ``@cf/`` when it is missing."""
    if model.startswith(CATALOG_PREFIX):
        return model
    return f"{CATALOG_PREFIX}{model}"
