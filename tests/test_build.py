"""Tests for the static-site build step."""

import logging

from typer.testing import CliRunner

from portal.build import app, build_site, resolve_values, substitute_placeholders

CONFIG_JS = """const CONFIG = {
    url: process.env.SUPABASE_URL,
    anonKey: process.env.SUPABASE_ANON_KEY
};
"""


def test_substitute_placeholders_quotes_values():
    values, missing = resolve_values(
        {"SUPABASE_URL": "https://x.supabase.co", "SUPABASE_ANON_KEY": "anon"}
    )

    out = substitute_placeholders(CONFIG_JS, values)

    assert missing == []
    assert 'url: "https://x.supabase.co",' in out
    assert 'anonKey: "anon"' in out
    assert "process.env" not in out


def test_missing_values_become_empty_strings(tmp_path, caplog):
    src = tmp_path / "static"
    src.mkdir()
    (src / "config.js").write_text(CONFIG_JS)

    with caplog.at_level(logging.WARNING):
        missing = build_site(src, tmp_path / "dist", {})

    assert missing == ["SUPABASE_URL", "SUPABASE_ANON_KEY"]
    assert 'url: "",' in (tmp_path / "dist" / "config.js").read_text()
    assert "SUPABASE_URL" in caplog.text


def test_non_js_files_copied_verbatim(tmp_path):
    src = tmp_path / "static"
    (src / "assets").mkdir(parents=True)
    html = "<script>process.env.SUPABASE_URL</script>"
    (src / "index.html").write_text(html)
    (src / "assets" / "logo.png").write_bytes(b"\x89PNG")

    build_site(src, tmp_path / "dist", {"SUPABASE_URL": "u", "SUPABASE_ANON_KEY": "k"})

    assert (tmp_path / "dist" / "index.html").read_text() == html
    assert (tmp_path / "dist" / "assets" / "logo.png").read_bytes() == b"\x89PNG"


def test_cli_builds_site(tmp_path, monkeypatch):
    src = tmp_path / "static"
    src.mkdir()
    (src / "config.js").write_text(CONFIG_JS)
    monkeypatch.setenv("SUPABASE_URL", "https://cli.supabase.co")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "cli-anon")

    result = CliRunner().invoke(app, ["--src", str(src), "--dist", str(tmp_path / "dist")])

    assert result.exit_code == 0
    assert '"https://cli.supabase.co"' in (tmp_path / "dist" / "config.js").read_text()


def test_cli_fails_without_source(tmp_path):
    result = CliRunner().invoke(app, ["--src", str(tmp_path / "nope"), "--dist", str(tmp_path / "dist")])

    assert result.exit_code == 1
