# Model catalog served by F5AI, built with family inheritance
from .model_families import ModelFamily, create_model_config

MODEL_CONFIGS = {
    # GPT-4o Family
    "gpt-4o": create_model_config(ModelFamily.GPT, "gpt-4o", {
        "display_name": "GPT-4o",
        "description": "Flagship GPT-4o chat model",
        "context_length": 128000,
    }),

    "gpt-4o-mini": create_model_config(ModelFamily.GPT, "gpt-4o-mini", {
        "display_name": "GPT-4o Mini",
        "description": "Smaller, faster GPT-4o variant",
        "context_length": 128000,
    }),

    # o1 Family
    "o1": create_model_config(ModelFamily.O_SERIES, "o1", {
        "display_name": "o1",
        "description": "Reasoning model",
        "context_length": 200000,
        "max_completion_tokens": 100000,
    }),

    "o1-mini": create_model_config(ModelFamily.O_SERIES, "o1-mini", {
        "display_name": "o1 Mini",
        "description": "Compact reasoning model",
        "context_length": 128000,
        "max_completion_tokens": 65536,
    }),

    # o3 Family
    "o3-mini": create_model_config(ModelFamily.O_SERIES, "o3-mini", {
        "display_name": "o3 Mini",
        "description": "Compact reasoning model, newer generation",
        "context_length": 200000,
        "max_completion_tokens": 100000,
    }),

    # Embeddings
    "text-embedding-3-large": create_model_config(ModelFamily.EMBEDDING, "text-embedding-3-large", {
        "display_name": "Text Embedding 3-Large",
        "description": "Large embedding model",
        "recommended_for": ["embed"],
    }),

    "text-embedding-3-small": create_model_config(ModelFamily.EMBEDDING, "text-embedding-3-small", {
        "display_name": "Text Embedding 3-Small",
        "description": "Small embedding model",
    }),

    "text-embedding-ada-002": create_model_config(ModelFamily.EMBEDDING, "text-embedding-ada-002", {
        "display_name": "Text Embedding Ada-002",
        "description": "Previous generation embedding model",
    }),
}

DEFAULT_MODEL = "gpt-4o-mini"
