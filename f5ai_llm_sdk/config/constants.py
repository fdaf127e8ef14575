"""
F5AI endpoint and model constants.

Central location for host names, endpoint defaults and the model lists
that drive request routing. Anything a deployment is expected to change
lives in ``settings.F5AIConfig`` instead.
"""

# Official endpoint; family-specific rewrites in the current revision only
# apply when talking to this exact base URL.
OFFICIAL_API_BASE = "https://api.f5ai.ru/v1/"
DEV_API_BASE = "https://dev.api.f5ai.ru/v1/"
DEFAULT_API_BASE = OFFICIAL_API_BASE

DEFAULT_API_VERSION = "2023-07-01-preview"
DEFAULT_MAX_EMBEDDING_BATCH_SIZE = 128
DEFAULT_EMBEDDING_MODEL = "text-embedding-3-large"
DEFAULT_TIMEOUT_SECONDS = 60.0

AZURE_API_TYPE = "azure"

# Gateway compatibility: the bearer token is duplicated under this header
AUTH_TOKEN_HEADER = "X-Auth-Token"

# Models served only by the legacy prompt-in/text-out endpoint
NON_CHAT_MODELS = [
    "text-davinci-002",
    "text-davinci-003",
    "code-davinci-002",
    "text-ada-001",
    "text-babbage-001",
    "text-curie-001",
    "davinci",
    "curie",
    "babbage",
    "ada",
]

# Never routed to the legacy endpoint, even when legacy mode is requested
CHAT_ONLY_MODELS = [
    "gpt-4o",
    "gpt-4o-mini",
    "o1",
    "o1-mini",
    "o3-mini",
]

# Models accepting a speculative-decoding "prediction" payload (substring match)
PREDICTION_MODELS = ("gpt-4o-mini", "gpt-4o")

# Stop-sequence ceilings keyed by host (url.host semantics, port included)
STOP_WORD_LIMITS_BY_HOST = {
    "api.deepseek.com": 16,
    "dev.api.f5ai.ru": 4,
    "api.openai.com": 4,
    "api.groq.com": 4,
}
STOP_WORD_LIMITS_BY_PORT = {
    1337: 4,
}
AZURE_MAX_STOP_WORDS = 4

# Sentinel finish reason some legacy completion backends put on the last event
LEGACY_END_OF_STREAM_MARKER = "eos"

DEFAULT_FINISH_REASON = "stop"

# Historic formatting preamble for o-series prompts. Disabled unless
# F5AIConfig.o_series_instructions is set.
DEFAULT_O_SERIES_INSTRUCTIONS = (
    "Always use markdown formatting. \n"
    "Include descriptions/explanations for your code.\n"
    "Only send the complete code if requested, otherwise, only send the "
    "modified/new sections of code.\n"
)
