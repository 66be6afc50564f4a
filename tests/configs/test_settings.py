"""
Test suite for configuration settings.

System role: Verification of environment variable mapping and defaults
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from doc_assistant.configs import Settings
from doc_assistant.configs.chunk_store import ChunkStoreSettings
from doc_assistant.configs.chunking import ChunkingSettings
from doc_assistant.configs.completion import CompletionSettings
from doc_assistant.configs.github import GitHubSettings
from doc_assistant.configs.indexing import IndexingSettings
from doc_assistant.configs.retrieval import RetrievalSettings


class TestDefaults:
    """Documented defaults."""

    def test_chunking_defaults(self) -> None:
        settings = ChunkingSettings()

        assert settings.max_chunk_size == 3000
        assert settings.min_viable_size == 50

    def test_retrieval_defaults(self) -> None:
        settings = RetrievalSettings()

        assert settings.top_k_files == 5
        assert settings.relevant_limit == 25
        assert settings.keyword_limit == 50
        assert settings.filename_bonus == 20.0

    def test_indexing_defaults(self) -> None:
        settings = IndexingSettings()

        assert settings.batch_size == 10
        assert settings.reindex_interval_seconds == 21600

    def test_settings_aggregates_modules(self) -> None:
        settings = Settings()

        assert isinstance(settings.chunking, ChunkingSettings)
        assert isinstance(settings.github, GitHubSettings)


class TestEnvironmentMapping:
    """Environment variables with per-module prefixes."""

    def test_chunking_prefix(self, monkeypatch) -> None:
        monkeypatch.setenv("CHUNKING_MAX_CHUNK_SIZE", "500")

        assert ChunkingSettings().max_chunk_size == 500

    def test_repositories_from_json(self, monkeypatch) -> None:
        monkeypatch.setenv(
            "GITHUB_REPOSITORIES",
            '[{"owner": "acme", "name": "docs"}, {"owner": "acme", "name": "api", "branch": "dev"}]',
        )

        repos = GitHubSettings().repositories

        assert [r.full_name for r in repos] == ["acme/docs", "acme/api"]
        assert repos[0].branch == "main"
        assert repos[1].branch == "dev"

    def test_chunk_store_path_is_expanded(self, monkeypatch, tmp_path) -> None:
        monkeypatch.setenv("CHUNK_STORE_DATA_DIR", str(tmp_path / "data"))

        assert ChunkStoreSettings().log_path == Path(tmp_path) / "data" / "chunks.jsonl"

    def test_home_is_expanded(self) -> None:
        assert "~" not in str(ChunkStoreSettings(data_dir="~/chunks").log_path)

    def test_invalid_value_is_rejected(self, monkeypatch) -> None:
        monkeypatch.setenv("INDEXING_BATCH_SIZE", "0")

        with pytest.raises(ValidationError):
            IndexingSettings()


class TestDotEnvFile:
    """Values read from a .env file in the working directory."""

    @pytest.fixture
    def env_dir(self, tmp_path, monkeypatch):
        (tmp_path / ".env").write_text(
            "\n".join(
                [
                    "CHUNKING_MAX_CHUNK_SIZE=1200",
                    "RETRIEVAL_TOP_K_FILES=3",
                    "INDEXING_PURGE_ON_STARTUP=false",
                    f"CHUNK_STORE_DATA_DIR={tmp_path / 'store'}",
                    "OLLAMA_MODEL=mistral",
                    "GITHUB_TOKEN=ghp_test",
                    "LOG_LEVEL=debug",
                ]
            ),
            encoding="utf-8",
        )
        monkeypatch.chdir(tmp_path)
        return tmp_path

    def test_every_module_reads_the_env_file(self, env_dir) -> None:
        assert ChunkingSettings().max_chunk_size == 1200
        assert RetrievalSettings().top_k_files == 3
        assert IndexingSettings().purge_on_startup is False
        assert ChunkStoreSettings().log_path == env_dir / "store" / "chunks.jsonl"
        assert CompletionSettings().model == "mistral"
        assert GitHubSettings().token == "ghp_test"

    def test_service_wide_fields(self, env_dir) -> None:
        settings = Settings()

        assert settings.log_level == "DEBUG"
        assert settings.cors_allow_origins == ["*"]

    def test_environment_overrides_env_file(self, env_dir, monkeypatch) -> None:
        monkeypatch.setenv("OLLAMA_MODEL", "llama3.1")

        assert CompletionSettings().model == "llama3.1"


class TestServiceWideFields:
    """Fields shared by every settings class."""

    def test_unknown_log_level_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(log_level="verbose")

    def test_cors_origins_from_json(self, monkeypatch) -> None:
        monkeypatch.setenv("CORS_ALLOW_ORIGINS", '["http://localhost:3000"]')

        assert Settings().cors_allow_origins == ["http://localhost:3000"]
