# tests/test_cli.py
import asyncio

from cli import cli
from cli.operations import OperationResult, seed_industries
from cli.seed_data import DEFAULT_INDUSTRIES


def test_parser_requires_command(capsys):
    assert cli.main([]) == 1


def test_match_command_reports_success(monkeypatch, capsys):
    async def fake_match(description):
        assert description == "We run a cafe"
        return OperationResult(
            True,
            "Matched Hospitality (high confidence)",
            {"slug": "hospitality", "reasoning": "Serves coffee.", "alternates": ["retail"]},
        )

    monkeypatch.setattr(cli, "match_description", fake_match)

    assert cli.main(["match", "We run a cafe"]) == 0
    out = capsys.readouterr().out
    assert "Matched Hospitality" in out
    assert "Alternates: retail" in out


def test_match_command_reports_failure_code(monkeypatch, capsys):
    async def fake_match(description):
        return OperationResult(False, "AI service not configured", {"code": "not_configured"})

    monkeypatch.setattr(cli, "match_description", fake_match)

    assert cli.main(["match", "x"]) == 1
    assert "not_configured" in capsys.readouterr().out


def test_unexpected_error_exit_code(monkeypatch, capsys):
    async def boom(args):
        raise RuntimeError("db down")

    monkeypatch.setitem(cli.COMMANDS, "list-industries", boom)

    assert cli.main(["list-industries"]) == 1
    assert "db down" in capsys.readouterr().out


def test_default_seed_includes_fallback_industry():
    slugs = [row["slug"] for row in DEFAULT_INDUSTRIES]
    assert "professional-services" in slugs
    assert len(slugs) == len(set(slugs))


def test_seed_without_fallback_is_rejected_before_touching_db():
    result = asyncio.run(seed_industries([{"slug": "retail", "name": "Retail"}]))
    assert result.success is False
    assert "professional-services" in result.message


def test_serve_uses_configured_host_and_port(monkeypatch, capsys):
    calls = []
    monkeypatch.setattr(cli.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    monkeypatch.setattr(cli.settings, "api_host", "127.0.0.1")
    monkeypatch.setattr(cli.settings, "api_port", 9000)

    assert cli.main(["serve"]) == 0

    app, kwargs = calls[0]
    assert app == "site_api.main:app"
    assert kwargs["host"] == "127.0.0.1"
    assert kwargs["port"] == 9000
    assert kwargs["reload"] is False


def test_serve_flags_override_settings(monkeypatch, capsys):
    calls = []
    monkeypatch.setattr(cli.uvicorn, "run", lambda app, **kwargs: calls.append(kwargs))

    assert cli.main(["serve", "--host", "0.0.0.0", "--port", "8080", "--reload"]) == 0

    assert calls == [
        {"host": "0.0.0.0", "port": 8080, "reload": True, "log_level": cli.settings.log_level.lower()}
    ]
