"""
Tests for AppConfig.
"""

from pastie.config import DEFAULT_EXTENSIONS, AppConfig


class TestAppConfig:
    """Test defaults, normalization and environment overrides."""

    def test_defaults(self):
        config = AppConfig()

        assert config.allowed_extensions == DEFAULT_EXTENSIONS
        assert config.preload is False
        assert config.log_level == "INFO"

    def test_extensions_are_normalized(self):
        config = AppConfig(allowed_extensions=(".PNG", " jpg ", "png", ""))

        assert config.allowed_extensions == ("png", "jpg")

    def test_accepts(self):
        config = AppConfig()

        assert config.accepts(".PNG")
        assert config.accepts("jpg")
        assert not config.accepts(".txt")
        assert not config.accepts("")

    def test_filetypes(self):
        filetypes = AppConfig(allowed_extensions=("png", "bmp")).filetypes()

        assert filetypes[0] == ("Image Files", "*.png *.bmp")
        assert ("All files", "*.*") in filetypes

    def test_from_env(self):
        config = AppConfig.from_env(
            {"PASTIE_EXTENSIONS": "PNG,.tif", "PASTIE_LOG_LEVEL": "debug", "PASTIE_PRELOAD": "yes"}
        )

        assert config.allowed_extensions == ("png", "tif")
        assert config.log_level == "DEBUG"
        assert config.preload is True

    def test_from_env_ignores_empty_values(self):
        config = AppConfig.from_env({"PASTIE_EXTENSIONS": " , ", "PASTIE_PRELOAD": "0"})

        assert config.allowed_extensions == DEFAULT_EXTENSIONS
        assert config.preload is False
