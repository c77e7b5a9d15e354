"""
dialogue.utils.i18n
===================

Internationalization utilities for the messages shown by the CLI.

Messages are kept in a built-in dictionary keyed by message id and language
code; unknown languages fall back to English.
"""

from __future__ import annotations

import logging
import os
from typing import Dict, List, Optional

from dialogue.config.settings import settings

logger = logging.getLogger(__name__)

# Default language if not specified
DEFAULT_LANGUAGE = "en"


class I18nManager:
    """
    Manages translated CLI messages.
    """

    def __init__(self):
        self._messages: Dict[str, Dict[str, str]] = {}
        self._current_language = self._determine_language()
        self._init_built_in_messages()

    def _determine_language(self) -> str:
        """Determine the current language based on settings or environment."""
        lang = settings.get("DEFAULT_LANGUAGE")
        if lang:
            return lang

        env_lang = os.environ.get("LANG", "").split(".")[0].split("_")[0].lower()
        if env_lang and len(env_lang) == 2:
            return env_lang

        return DEFAULT_LANGUAGE

    def _init_built_in_messages(self) -> None:
        """Initialize with built-in messages."""
        self._messages = {
            "help.cli": {
                "en": "Talk to Stack-chan through the chat completions API.",
                "ja": "チャット補完APIでスタックチャンと会話します。",
            },
            "help.log_level": {
                "en": "Logging level (DEBUG shows the HTTP trace)",
                "ja": "ログレベル（DEBUG で HTTP トレースを表示）",
            },
            "help.log_dir": {
                "en": "Also write logs to dialogue.log in this directory",
                "ja": "このディレクトリの dialogue.log にもログを書き込みます",
            },
            "help.locale": {
                "en": "Persona context locale (ja, en)",
                "ja": "ペルソナのロケール（ja, en）",
            },
            "help.ask": {
                "en": "Send one message and print the reply.",
                "ja": "メッセージを一つ送信して返答を表示します。",
            },
            "help.chat": {
                "en": "Start an interactive conversation.",
                "ja": "対話モードを開始します。",
            },
            "help.context": {
                "en": "Show the persona context sent before every message.",
                "ja": "毎回送信されるペルソナのコンテキストを表示します。",
            },
            "param.message": {
                "en": "Message to send",
                "ja": "送信するメッセージ",
            },
            "param.api_key": {
                "en": "API key (defaults to OPENAI_API_KEY)",
                "ja": "APIキー（既定値は OPENAI_API_KEY）",
            },
            "param.model": {
                "en": "Model name (defaults to MODEL)",
                "ja": "モデル名（既定値は MODEL）",
            },
            "error.missing_api_key": {
                "en": "No API key configured. Set OPENAI_API_KEY or pass --api-key.",
                "ja": "APIキーが設定されていません。OPENAI_API_KEY を設定するか --api-key を指定してください。",
            },
            "error.post_failed": {
                "en": "❌ {reason} ({error})",
                "ja": "❌ {reason}（{error}）",
            },
            "chat.banner": {
                "en": "Stack-chan - type '/help' for commands or '/exit' to quit",
                "ja": "スタックチャン - '/help' でコマンド一覧、'/exit' で終了",
            },
            "chat.you": {
                "en": "You",
                "ja": "あなた",
            },
            "chat.assistant": {
                "en": "Stack-chan",
                "ja": "スタックチャン",
            },
            "chat.cleared": {
                "en": "[Chat history cleared.]",
                "ja": "[会話履歴を消去しました]",
            },
            "chat.history_empty": {
                "en": "[No messages yet.]",
                "ja": "[まだメッセージはありません]",
            },
            "chat.help": {
                "en": "Available commands:\n  /clear - forget the conversation\n  /history - show the conversation\n  /context - show the persona context\n  /exit - leave the chat",
                "ja": "コマンド一覧:\n  /clear - 会話を忘れる\n  /history - 会話を表示\n  /context - ペルソナを表示\n  /exit - 終了",
            },
            "command.unknown": {
                "en": "Unknown command: /{command}",
                "ja": "不明なコマンド: /{command}",
            },
        }

    def get_message(self, key: str, language: Optional[str] = None, **kwargs) -> str:
        """
        Get a translated message by key.

        Args:
            key: The message identifier
            language: Optional language override (defaults to current language)
            **kwargs: Format variables to insert into the message

        Returns:
            The translated and formatted message
        """
        lang = language or self._current_language

        if key in self._messages and lang in self._messages[key]:
            message = self._messages[key][lang]
        elif key in self._messages and DEFAULT_LANGUAGE in self._messages[key]:
            message = self._messages[key][DEFAULT_LANGUAGE]
            logger.debug("Falling back to %s for message: %s", DEFAULT_LANGUAGE, key)
        else:
            message = f"Message not found: {key}"
            logger.warning(message)

        try:
            return message.format(**kwargs)
        except KeyError as e:
            logger.warning("Missing format parameter in message %s: %s", key, e)
            return message

    @property
    def current_language(self) -> str:
        """Get the current language code."""
        return self._current_language

    def set_language(self, language: str) -> None:
        self._current_language = language

    @property
    def supported_languages(self) -> List[str]:
        """Languages with at least one translated message."""
        return sorted({lang for texts in self._messages.values() for lang in texts})


# Singleton instance
i18n_manager = I18nManager()


def get_message(key: str, **kwargs) -> str:
    """
    Get a translated message by key with variable substitution.

    Args:
        key: The message identifier
        **kwargs: Variables to format into the message

    Returns:
        The translated and formatted message
    """
    return i18n_manager.get_message(key, **kwargs)
