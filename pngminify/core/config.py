from dataclasses import dataclass
from typing import Optional


DEFAULT_ARTIFACT_SUFFIX = "-fs8"
DEFAULT_VERSION_MARKER = "pngquant, 2."


# ============================================================================
# Configuration Classes
# ============================================================================


@dataclass
class MinifyConfig:
    """Configuration for a pngquant batch."""

    tool_path: Optional[str] = None
    quality: int = 100
    artifact_suffix: str = DEFAULT_ARTIFACT_SUFFIX
    version_marker: str = DEFAULT_VERSION_MARKER
    verbose: bool = True
    skip_if_larger: bool = True
    max_workers: int = 1
    verify_timeout: float = 10.0
    locale: str = "en"


# ============================================================================
# Parameter Validator
# ============================================================================


class ParameterValidator:
    """Validates batch parameters."""

    @staticmethod
    def validate(config: MinifyConfig) -> None:
        """Validate all parameters in the configuration."""
        ParameterValidator.validate_quality(config.quality)
        ParameterValidator.validate_artifact_suffix(config.artifact_suffix)
        ParameterValidator.validate_version_marker(config.version_marker)
        ParameterValidator.validate_max_workers(config.max_workers)
        ParameterValidator.validate_verify_timeout(config.verify_timeout)
        ParameterValidator.validate_locale(config.locale)

    @staticmethod
    def validate_quality(quality: int) -> None:
        """Validate pngquant quality value."""
        if isinstance(quality, bool) or not isinstance(quality, int):
            raise ValueError(f"quality must be an integer, got {quality!r}")
        if not (0 <= quality <= 100):
            raise ValueError(f"quality must be between 0 and 100, got {quality}")

    @staticmethod
    def validate_artifact_suffix(artifact_suffix: str) -> None:
        """Validate the suffix pngquant appends to its output files."""
        if not artifact_suffix:
            raise ValueError("artifact_suffix cannot be empty")
        if "/" in artifact_suffix or "\\" in artifact_suffix:
            raise ValueError(f"artifact_suffix cannot contain path separators, got {artifact_suffix}")

    @staticmethod
    def validate_version_marker(version_marker: str) -> None:
        """Validate the version marker searched for in the tool's banner."""
        if not version_marker:
            raise ValueError("version_marker cannot be empty")

    @staticmethod
    def validate_max_workers(max_workers: int) -> None:
        """Validate worker count."""
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")

    @staticmethod
    def validate_verify_timeout(verify_timeout: float) -> None:
        """Validate verification timeout."""
        if verify_timeout <= 0:
            raise ValueError(f"verify_timeout must be positive, got {verify_timeout}")

    @staticmethod
    def validate_locale(locale: str) -> None:
        """Validate message locale."""
        from pngminify.services.messages import available_locales

        if locale not in available_locales():
            raise ValueError(f"locale must be one of {available_locales()}, got {locale}")
