from pathlib import Path

from article_analyzer.config import Settings


def test_settings_read_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("TARGET_APPROVED_ARTICLE_COUNT", "7")
    monkeypatch.setenv("NAME_APP", "AnalyzerUnderTest")
    monkeypatch.setenv("LLM_TIMEOUT_SECONDS", "15")
    settings = Settings(_env_file=None)
    assert settings.target_approved_article_count == 7
    assert settings.name_app == "AnalyzerUnderTest"
    assert settings.llm_timeout_seconds == 15.0


def test_settings_defaults(monkeypatch) -> None:
    for name in (
        "TARGET_APPROVED_ARTICLE_COUNT",
        "PROMPT_TEMPLATE_PATH",
        "KEYWORD_RATING_THRESHOLD",
        "SEMANTIC_SCORER_NAME",
        "LOG_FILE_PATH",
    ):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)
    assert settings.target_approved_article_count == 0
    assert settings.keyword_rating_threshold == 0.4
    assert settings.semantic_scorer_name == "NewsNexusSemanticScorer02"
    assert settings.prompt_template_path is None
    assert settings.log_file_path == Path("microservice-output.log")
