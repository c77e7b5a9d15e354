"""Default configuration values for the Stack-chan dialogue client.

Defines the baseline configuration for the completions endpoint, the model and
the persona context. These defaults are overridden by YAML config and
environment variables at runtime.
"""

# Persona contexts keyed by locale. CONTEXT_LOCALE picks one of them unless
# an explicit CONTEXT list is configured.
DEFAULT_CONTEXTS = {
    "ja": [
        {
            "role": "system",
            "content": "あなたは手のひらサイズのスーパーカワイイロボット「スタックチャン」です。",
        },
        {
            "role": "system",
            "content": "スタックチャンは1歳で、いつでも元気いっぱいです。",
        },
        {
            "role": "system",
            "content": "最初にししかわがスタックチャンを作りましたが、今では世界中に何百体ものスタックチャンがいます。",
        },
        {
            "role": "system",
            "content": "くだけた表現で簡潔に話します。",
        },
    ],
    "en": [
        {
            "role": "system",
            "content": "You are Stack-chan, the palm sized super kawaii companion robot.",
        },
        {
            "role": "system",
            "content": "Stack-chan is one year old and always full of energy.",
        },
        {
            "role": "system",
            "content": "First ししかわ made Stack-chan, and now there are hundreds of them all over the world.",
        },
        {
            "role": "system",
            "content": "You respond in frank and simple sentences to the user's message.",
        },
    ],
}

# Default configuration dictionary
DEFAULT_CONFIG = {
    # -------------------------------------------------------------------------
    # API Configuration
    # -------------------------------------------------------------------------
    "OPENAI_API_KEY": "",  # Set via .env
    "API_URL": "https://api.openai.com/v1/chat/completions",
    "LLM_PROVIDER": "openai",
    "REQUEST_TIMEOUT": 30.0,  # Seconds before a post is reported as failed

    # -------------------------------------------------------------------------
    # Model Configuration
    # -------------------------------------------------------------------------
    "MODEL": "gpt-3.5-turbo",

    # -------------------------------------------------------------------------
    # Persona Configuration
    # -------------------------------------------------------------------------
    "CONTEXT_LOCALE": "ja",
    "CONTEXTS": DEFAULT_CONTEXTS,
    "CONTEXT": None,  # Explicit list of messages; wins over CONTEXTS

    # -------------------------------------------------------------------------
    # CLI / Logging
    # -------------------------------------------------------------------------
    "DEFAULT_LANGUAGE": "en",
    "LOG_LEVEL": "WARNING",
}
