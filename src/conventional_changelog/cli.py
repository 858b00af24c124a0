"""
Command line interface for the conventional_changelog tool.

This module defines the ``main`` function which is used as the entry point
when executing the ``changelog`` command. It locates the repository, loads
the configuration, reads the commits since the last release tag and prints
the rendered changelog. Exit codes are listed below.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import click
from click.core import ParameterSource

from conventional_changelog import __version__
from conventional_changelog.changelog import generate_changelog
from conventional_changelog.config.loader import ChangelogConfig, ConfigError, load_config
from conventional_changelog.rendering.formats import Format
from conventional_changelog.rendering.renderer import RenderOptions
from conventional_changelog.vcs.git_client import GitClient, GitError

# Create a module-level logger. Attach a null handler and disable
# propagation to avoid logging errors when the root logger's stream is
# closed (such as during unit tests).
logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_GENERIC_ERROR = 1
EXIT_INVALID_USAGE = 2
EXIT_NO_REPO = 3
EXIT_CONFIG_ERROR = 5
EXIT_VCS_FAILURE = 6


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    click.echo(f"✗ {message}", err=True)


# ---------------------------------------------------------------------------
# Core functionality
# ---------------------------------------------------------------------------

def resolve_start_ref(client: GitClient, from_ref: Optional[str]) -> Optional[str]:
    """Return the exclusive start of the commit range.

    An explicit ``from_ref`` wins; otherwise the commit of the latest tag is
    used, and a repository without tags yields ``None`` (whole history).
    """
    if from_ref:
        return from_ref
    tag = client.get_last_tag()
    if tag is None:
        logger.info("No release tag found; using the whole history")
        return None
    tag_hash = client.get_tag_hash(tag)
    logger.info("Collecting commits since tag %s (%s)", tag, tag_hash[:7])
    return tag_hash


def merge_options(config: ChangelogConfig, overrides: Dict[str, Any]) -> RenderOptions:
    """Apply command line overrides on top of the configured render options."""
    values = {
        "display_title": config.options.display_title,
        "display_author": config.options.display_author,
        "display_links": config.options.display_links,
        "format": config.options.format,
        "title": config.options.title,
        "commit_url": config.options.commit_url,
        "section_titles": config.options.section_titles,
        "order": config.options.order,
    }
    values.update(overrides)
    return RenderOptions(**values)


def _explicit(ctx: click.Context, name: str) -> bool:
    return ctx.get_parameter_source(name) not in (ParameterSource.DEFAULT, None)


@click.command()
@click.option("--next-version", "next_version", required=True, help="Version shown in the changelog heading.")
@click.option("--from", "from_ref", default=None, help="Start of the commit range (defaults to the latest tag).")
@click.option("--to", "to_ref", default="HEAD", show_default=True, help="End of the commit range.")
@click.option(
    "--format",
    "output_format",
    type=click.Choice([f.value for f in Format], case_sensitive=False),
    default=Format.MARKDOWN.value,
    show_default=True,
    help="Output format.",
)
@click.option("--title", default="", help="Text placed in the heading after the version.")
@click.option("--commit-url", default="", help="Base URL of commit links.")
@click.option("--header/--no-header", "display_title", default=True, help="Show the version heading.")
@click.option("--author/--no-author", "display_author", default=False, help="Show the author of each commit.")
@click.option("--links/--no-links", "display_links", default=True, help="Show a link to each commit.")
@click.option("--ignore-scope", "ignore_scopes", multiple=True, help="Leave out commits with this scope (repeatable).")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Configuration file (defaults to .changelog.json in the repository root).",
)
@click.option(
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    default=None,
    help="Write the changelog to this file instead of stdout.",
)
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(version=__version__, prog_name="changelog")
@click.pass_context
def main(
    ctx: click.Context,
    next_version: str,
    from_ref: Optional[str],
    to_ref: str,
    output_format: str,
    title: str,
    commit_url: str,
    display_title: bool,
    display_author: bool,
    display_links: bool,
    ignore_scopes: Tuple[str, ...],
    config_path: Optional[Path],
    output_path: Optional[Path],
    verbose: bool,
) -> None:
    """Generate a changelog from Conventional Commit messages.

    Commits since the latest tag are grouped into sections (features, bug
    fixes, breaking changes, ...) and printed as Markdown, plain text or
    Slack markup.
    """
    # Use force=True to ensure handlers are reconfigured on subsequent
    # invocations (important for tests).
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        force=True,
    )

    try:
        repo_root = GitClient.find_repo_root(Path.cwd())
        if repo_root is None:
            print_error("Current directory is not inside a Git repository.")
            raise click.exceptions.Exit(EXIT_NO_REPO)
        logger.debug("Repository root: %s", repo_root)

        try:
            config = load_config(repo_root, config_path)
        except ConfigError as exc:
            print_error(f"Configuration error: {exc}")
            raise click.exceptions.Exit(EXIT_CONFIG_ERROR)

        overrides: Dict[str, Any] = {}
        if _explicit(ctx, "output_format"):
            overrides["format"] = Format.from_name(output_format)
        for name, value in (
            ("title", title),
            ("commit_url", commit_url),
            ("display_title", display_title),
            ("display_author", display_author),
            ("display_links", display_links),
        ):
            if _explicit(ctx, name):
                overrides[name] = value
        options = merge_options(config, overrides)
        scopes = tuple(config.ignore_scopes) + tuple(ignore_scopes)

        client = GitClient(repo_root)
        try:
            start = resolve_start_ref(client, from_ref)
            records = client.get_commits(start, to_ref)
        except GitError as exc:
            print_error(f"Git error: {exc}")
            raise click.exceptions.Exit(EXIT_VCS_FAILURE)

        logger.info("Found %d commit(s)", len(records))
        text = generate_changelog(records, next_version, options, ignore_scopes=scopes)

        if output_path is not None:
            output_path.write_text(text + "\n", encoding="utf-8")
            logger.info("Changelog written to %s", output_path)
        else:
            click.echo(text)

        raise click.exceptions.Exit(EXIT_SUCCESS)

    except click.exceptions.Exit:
        # Click uses its own Exit exception; re-raise to let Click handle it
        raise
    except Exception as exc:
        logging.exception("Unhandled error: %s", exc)
        print_error(f"Unexpected error: {exc}")
        raise click.exceptions.Exit(EXIT_GENERIC_ERROR)
