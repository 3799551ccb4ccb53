"""
User-facing message table keyed by locale and message id.

Hosts look strings up through :func:`get_message`; unknown locales fall back
to English so a missing translation never hides an error from the user.
"""

from typing import Dict, List


DEFAULT_LOCALE = "en"

MESSAGES: Dict[str, Dict[str, str]] = {
    "en": {
        "path_blank": "Path to pngquant is blank!",
        "tool_not_found": "Compatible pngquant not found",
        "no_png_files": "No PNG files found in {folder}",
        "found_files": "Found {count} PNG file(s) to process...",
        "running": "Running...",
        "batch_complete": "Compression Complete!",
        "batch_cancelled": "Compression cancelled.",
        "failed_files": "{count} file(s) failed",
    },
    "ja": {
        "path_blank": "pngquant のパスが空です！",
        "tool_not_found": "互換性のある pngquant が見つかりません",
        "no_png_files": "{folder} に PNG ファイルが見つかりません",
        "found_files": "{count} 個の PNG ファイルを処理します...",
        "running": "実行中...",
        "batch_complete": "圧縮が完了しました！",
        "batch_cancelled": "圧縮がキャンセルされました。",
        "failed_files": "{count} 個のファイルが失敗しました",
    },
}


def available_locales() -> List[str]:
    """Return the locales that have a message table."""
    return sorted(MESSAGES)


def get_message(key: str, locale: str = DEFAULT_LOCALE, **kwargs) -> str:
    """
    Look up a message and fill in its placeholders.

    Args:
        key: Message id (e.g. "tool_not_found")
        locale: Locale code; falls back to English when unknown
        **kwargs: Values for the message's ``{placeholders}``

    Raises:
        KeyError: If the message id does not exist in English either
    """
    table = MESSAGES.get(locale, MESSAGES[DEFAULT_LOCALE])
    template = table.get(key)
    if template is None:
        template = MESSAGES[DEFAULT_LOCALE][key]
    return template.format(**kwargs) if kwargs else template
