from pathlib import Path

ENV_EXAMPLE = Path(__file__).resolve().parents[2] / ".env.example"


def test_env_example_lists_settings():
    content = ENV_EXAMPLE.read_text(encoding="utf-8")
    for key in ("DATABASE_URL", "CORS_ORIGIN", "LOG_LEVEL", "LOG_TO_FILE", "UPLOAD_DIR",
                "MAX_UPLOAD_BYTES", "WEATHER_DEFAULT_CITY", "WEATHER_TIMEOUT"):
        assert f"{key}=" in content
