# portal/build.py
"""
Static-site build step.

Copies the static source tree into a dist directory, replacing the
Supabase placeholders in JavaScript files with values from the
deployment environment. Missing values become empty strings and are
reported as a warning, never as a failure.

    portal-build --src static --dist dist
"""

import json
import logging
import os
import shutil
from collections.abc import Mapping
from pathlib import Path

import typer

logger = logging.getLogger(__name__)

# Placeholder token in the static assets -> environment variable
PLACEHOLDERS: dict[str, str] = {
    "process.env.SUPABASE_URL": "SUPABASE_URL",
    "process.env.SUPABASE_ANON_KEY": "SUPABASE_ANON_KEY",
}

SUBSTITUTED_SUFFIXES = {".js"}

app = typer.Typer(no_args_is_help=False, add_completion=False)


def resolve_values(env: Mapping[str, str]) -> tuple[dict[str, str], list[str]]:
    """
    Look up every placeholder's variable.

    Returns the replacement values (missing ones as "") and the names
    of the variables that were missing.
    """
    values: dict[str, str] = {}
    missing: list[str] = []
    for token, var in PLACEHOLDERS.items():
        value = env.get(var) or ""
        if not value:
            missing.append(var)
        values[token] = value
    return values, missing


def substitute_placeholders(text: str, values: Mapping[str, str]) -> str:
    """Replace each placeholder token with its value as a JS string literal."""
    for token, value in values.items():
        text = text.replace(token, json.dumps(value))
    return text


def build_site(src: Path, dist: Path, env: Mapping[str, str]) -> list[str]:
    """
    Build `dist` from `src`.

    Returns the names of missing environment variables.

    Raises:
        FileNotFoundError: if `src` does not exist.
    """
    if not src.is_dir():
        raise FileNotFoundError(f"Source directory not found: {src}")

    values, missing = resolve_values(env)
    dist.mkdir(parents=True, exist_ok=True)

    for path in sorted(src.rglob("*")):
        if not path.is_file():
            continue
        target = dist / path.relative_to(src)
        target.parent.mkdir(parents=True, exist_ok=True)

        if path.suffix in SUBSTITUTED_SUFFIXES:
            target.write_text(
                substitute_placeholders(path.read_text(encoding="utf-8"), values),
                encoding="utf-8",
            )
            logger.info("✅ Processed: %s -> %s", path, target)
        else:
            shutil.copy2(path, target)
            logger.info("📁 Copied: %s -> %s", path, target)

    if missing:
        logger.warning("⚠️  Environment variables not found: %s", ", ".join(missing))
    else:
        logger.info("✅ Environment variables found and injected")
    return missing


@app.command()
def build(
    src: Path = typer.Option(Path("static"), help="Static source directory."),
    dist: Path = typer.Option(Path("dist"), help="Output directory."),
    log_level: str = typer.Option("INFO", help="Logging level."),
) -> None:
    """Build the static site for deployment."""
    logging.basicConfig(level=log_level.upper())
    try:
        build_site(src, dist, os.environ)
    except FileNotFoundError as exc:
        logger.error("❌ %s", exc)
        raise typer.Exit(code=1)
    logger.info("🎉 Build completed: files generated in %s", dist)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
