"""Tests for the CLI entry point."""

from unittest.mock import Mock, patch

import pytest

from jobboard.config.environment import EnvironmentConfig
from jobboard.config.exceptions import ConfigurationError
from jobboard.config.models import AppConfig, LoggingConfig, ProviderConfig
from jobboard.main import load_runtime_config, main
from jobboard.provider.models import FetchFailure, FetchSuccess
from jobboard.service import JobListing, SearchResult
from jobboard.stats import JobStats


def make_configs(log_level="INFO", config_level="WARNING"):
    app_config = AppConfig(
        provider=ProviderConfig(base_url="https://jobs.example.com"),
        refresh_interval="15m",
        logging=LoggingConfig(level=config_level, format="key-value"),
    )
    env_config = EnvironmentConfig(provider_auth_token="token", log_level=log_level)
    return app_config, env_config


def make_service(refresh_result):
    service = Mock()
    service.refresh_now.return_value = refresh_result
    service.get_jobs.return_value = JobListing()
    service.search_jobs.return_value = SearchResult(query="python")
    service.get_stats.return_value = JobStats()
    return service


class TestLoadRuntimeConfig:
    """Log level priority: CLI > env > config."""

    def test_log_level_priority(self, tmp_path):
        app_config, env_config = make_configs(log_level="INFO", config_level="WARNING")

        with patch("jobboard.main.load_config") as mock_load:
            mock_load.return_value = (app_config, env_config)

            _, env = load_runtime_config(tmp_path / "config.yaml", "DEBUG")
            assert env.log_level == "DEBUG"

            env_config.log_level = "INFO"
            _, env = load_runtime_config(tmp_path / "config.yaml", None)
            assert env.log_level == "INFO"

            env_config.log_level = None
            _, env = load_runtime_config(tmp_path / "config.yaml", None)
            assert env.log_level == "WARNING"

    def test_refresh_interval_seconds_computed(self):
        app_config, _ = make_configs()
        assert app_config.refresh_interval_seconds == 900


class TestMain:
    """main() in manual-run and daemon modes."""

    @patch("jobboard.main.JobService")
    @patch("jobboard.main.init_database")
    @patch("jobboard.main.close_database")
    @patch("jobboard.main.configure_logging")
    @patch("jobboard.main.load_runtime_config")
    @patch("sys.argv", ["job-board", "--manual-run"])
    def test_manual_run_success(
        self, mock_load, mock_configure_logging, mock_close_db, mock_init_db, mock_service_cls, capsys
    ):
        mock_load.return_value = make_configs()
        service = make_service(FetchSuccess(records=[], attempts=1))
        mock_service_cls.from_config.return_value = service

        exit_code = main()

        assert exit_code == 0
        mock_configure_logging.assert_called_once()
        mock_init_db.assert_called_once_with("sqlite:///./data/job_board.db")
        mock_close_db.assert_called_once()
        service.refresh_now.assert_called_once()
        service.get_jobs.assert_called_once_with(limit=50, offset=0)
        assert '"total": 0' in capsys.readouterr().out

    @patch("jobboard.main.JobService")
    @patch("jobboard.main.init_database")
    @patch("jobboard.main.close_database")
    @patch("jobboard.main.configure_logging")
    @patch("jobboard.main.load_runtime_config")
    @patch("sys.argv", ["job-board", "--manual-run", "--query", "python"])
    def test_manual_run_with_query(
        self, mock_load, mock_configure_logging, mock_close_db, mock_init_db, mock_service_cls
    ):
        mock_load.return_value = make_configs()
        service = make_service(FetchSuccess(records=[], attempts=1))
        mock_service_cls.from_config.return_value = service

        assert main() == 0
        service.search_jobs.assert_called_once_with("python", limit=50, offset=0)
        service.get_jobs.assert_not_called()

    @patch("jobboard.main.JobService")
    @patch("jobboard.main.init_database")
    @patch("jobboard.main.close_database")
    @patch("jobboard.main.configure_logging")
    @patch("jobboard.main.load_runtime_config")
    @patch("sys.argv", ["job-board", "--manual-run"])
    def test_manual_run_refresh_failure_exits_1(
        self, mock_load, mock_configure_logging, mock_close_db, mock_init_db, mock_service_cls
    ):
        mock_load.return_value = make_configs()
        mock_service_cls.from_config.return_value = make_service(
            FetchFailure(error="HTTP 503", attempts=3)
        )

        assert main() == 1
        mock_close_db.assert_called_once()

    @patch("jobboard.main.SchedulerService")
    @patch("jobboard.main.JobService")
    @patch("jobboard.main.init_database")
    @patch("jobboard.main.close_database")
    @patch("jobboard.main.configure_logging")
    @patch("jobboard.main.load_runtime_config")
    @patch("signal.signal")
    @patch("sys.argv", ["job-board"])
    def test_daemon_mode(
        self,
        mock_signal,
        mock_load,
        mock_configure_logging,
        mock_close_db,
        mock_init_db,
        mock_service_cls,
        mock_scheduler_cls,
    ):
        mock_load.return_value = make_configs()
        service = make_service(FetchSuccess(records=[], attempts=1))
        mock_service_cls.from_config.return_value = service
        scheduler = Mock()
        scheduler.start.side_effect = KeyboardInterrupt()
        mock_scheduler_cls.return_value = scheduler

        exit_code = main()

        assert exit_code == 0
        scheduler.start.assert_called_once()
        _, kwargs = mock_scheduler_cls.call_args
        assert kwargs["refresh_callable"] == service.refresh_now
        assert kwargs["interval_seconds"] == 900

    @patch("jobboard.main.load_runtime_config")
    @patch("sys.argv", ["job-board", "--config", "nonexistent.yaml"])
    def test_configuration_error(self, mock_load, capsys):
        mock_load.side_effect = ConfigurationError(
            "Config file not found", suggestions=["Create config.yaml"]
        )

        assert main() == 1
        assert "Configuration Error" in capsys.readouterr().err

    @patch("jobboard.main.load_runtime_config")
    @patch("sys.argv", ["job-board"])
    def test_keyboard_interrupt(self, mock_load):
        mock_load.side_effect = KeyboardInterrupt()
        assert main() == 0

    @patch("sys.argv", ["job-board", "--log-level", "VERBOSE"])
    def test_invalid_log_level_choice(self):
        with pytest.raises(SystemExit):
            main()
