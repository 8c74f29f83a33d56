from pathlib import Path

import pytest
from typer.testing import CliRunner

from pressmark.cli import app
from pressmark.cli.parsers import parse_override

runner = CliRunner()


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A site laid out with the default directory names, used as cwd."""
    (tmp_path / "content" / "blog").mkdir(parents=True)
    (tmp_path / "templates").mkdir()
    (tmp_path / "templates" / "page.html").write_text(
        "{{ site_title }}: {{ page.title }}\n{{ content }}", encoding="utf-8"
    )
    (tmp_path / "content" / "index.md").write_text("# Welcome", encoding="utf-8")
    (tmp_path / "content" / "blog" / "first_post.md").write_text("hello", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_build_with_defaults(project: Path) -> None:
    result = runner.invoke(app, ["build"])

    assert result.exit_code == 0, result.output
    assert (project / "dist" / "index.html").read_text(encoding="utf-8") == (
        "My Static Site: Index\n<h1>Welcome</h1>"
    )
    assert (project / "dist" / "blog" / "first_post.html").is_file()


def test_build_with_overrides(project: Path) -> None:
    result = runner.invoke(
        app, ["build", "--set", "output_dir=public", "--set", "site_title=Notes"]
    )

    assert result.exit_code == 0, result.output
    assert (project / "public" / "index.html").read_text(encoding="utf-8").startswith(
        "Notes: Index"
    )
    assert not (project / "dist").exists()


def test_build_with_config_file(project: Path) -> None:
    (project / "site.yml").write_text("output_dir: out\n", encoding="utf-8")

    result = runner.invoke(app, ["build", "--config", "site.yml"])

    assert result.exit_code == 0, result.output
    assert (project / "out" / "index.html").is_file()


def test_build_failure_exits_with_status_1(project: Path) -> None:
    result = runner.invoke(app, ["build", "--set", "source_dir=missing"])

    assert result.exit_code == 1
    assert "[ERROR] The content directory 'missing' does not exist" in result.output


def test_unsafe_output_dir_is_reported(project: Path) -> None:
    result = runner.invoke(app, ["build", "--set", "output_dir="])

    assert result.exit_code == 1
    assert "[ERROR] Refusing to use the working directory as output_dir" in result.output
    assert (project / "content" / "index.md").is_file()


def test_malformed_override_is_usage_error(project: Path) -> None:
    result = runner.invoke(app, ["build", "--set", "no-equals-sign"])
    assert result.exit_code == 2


def test_parse_override() -> None:
    assert parse_override("Base_URL=https://x.org/a=b") == ("base_url", "https://x.org/a=b")


def test_parse_override_rejects_unknown_option() -> None:
    import typer

    with pytest.raises(typer.BadParameter, match="Unknown option"):
        parse_override("colour=blue")
