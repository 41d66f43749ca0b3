# Description: Loads config sources.yaml, converts every HTML page it points at.
# For each source:
                # local *.html under raw_dir - read file, convert, write Markdown
                # configured URL - fetch page, convert, write Markdown
# Output mirrors the source path under processed_dir, with metadata
# front matter unless front_matter is off.

import argparse
import logging
import os
import urllib.parse
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Tuple

import frontmatter
import yaml

from ingest.errors import ConfigError, ConverterError
from ingest.loader import DEFAULT_PARSER, DEFAULT_TIMEOUT, convert_source, setup_logger

DEFAULTS = {
    "parser": DEFAULT_PARSER,
    "front_matter": True,
    "timeout": DEFAULT_TIMEOUT,
    "workers": 1,
    "urls": [],
}


# open sources.yaml, parse it with safe_load and fill in optional keys
def load_cfg(path="sources.yaml") -> dict:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at the top level, got {type(data).__name__}")

    paths = data.get("paths") or {}
    missing = [k for k in ("raw_dir", "processed_dir") if not paths.get(k)]
    if missing:
        raise ConfigError(f"{path}: missing paths.{', paths.'.join(missing)}")

    cfg = {**DEFAULTS, **data}
    cfg["urls"] = list(cfg.get("urls") or [])
    return cfg


# Build a file path under base_dir that mirrors the URL path.
# Ensures parent directory exists.
def path_from_url(base_dir: str, url: str, replace_ext: str | None = ".md") -> str:
    rel = urllib.parse.urlparse(url).path.lstrip("/")
    head, tail = os.path.split(rel)
    # If the URL ends with '/', os.path.split gives tail == ''
    if not tail:
        tail = "index"
    if replace_ext is not None:
        stem, _ = os.path.splitext(tail)
        tail = stem + replace_ext
    full = os.path.join(base_dir, head, tail)
    os.makedirs(os.path.dirname(full), exist_ok=True)
    return full


# raw/foo/bar.html -> processed/foo/bar.md
def path_from_file(raw_dir: str, processed_dir: str, html_path: Path) -> Path:
    rel = Path(os.path.relpath(html_path, raw_dir)).with_suffix(".md")
    out = Path(processed_dir) / rel
    out.parent.mkdir(parents=True, exist_ok=True)
    return out


def find_html_files(raw_dir: str) -> List[Path]:
    p = Path(raw_dir)
    if not p.is_dir():
        logging.warning(f"raw_dir {raw_dir} does not exist, no local files")
        return []
    files = sorted(p.rglob("*.html"))
    logging.info("Found %d HTML files under %s", len(files), raw_dir)
    return files


def write_front_matter_markdown(md_text: str, meta: dict) -> str:
    post = frontmatter.Post(md_text, **meta)
    return frontmatter.dumps(post) + "\n"


def collect_sources(cfg: dict) -> List[Tuple[str, str, str]]:
    # (source, kind, out_path)
    raw_dir = cfg["paths"]["raw_dir"]
    proc_dir = cfg["paths"]["processed_dir"]
    sources = []
    for html_path in find_html_files(raw_dir):
        sources.append((str(html_path), "file", str(path_from_file(raw_dir, proc_dir, html_path))))
    if cfg["urls"]:
        logging.info(f"Adding {len(cfg['urls'])} configured URLs")
    for url in cfg["urls"]:
        sources.append((url, "url", path_from_url(proc_dir, url)))
    return sources


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="html-ingest-all", description="Convert every configured HTML source to Markdown")
    parser.add_argument("--config", default="sources.yaml", help="Path to sources.yaml")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logger(logging.DEBUG if args.verbose else logging.INFO)
    try:
        cfg = load_cfg(args.config)
    except ConfigError as e:
        logging.error(str(e))
        return 1

    sources = collect_sources(cfg)
    if not sources:
        logging.info("Nothing to convert. Put *.html under raw_dir or list urls in the config.")
        return 0

    success, fail = 0, 0
    for i, (source, kind, out_path) in enumerate(sources, start=1):
        try:
            md_body = convert_source(
                source,
                parser=cfg["parser"],
                timeout=cfg["timeout"],
                workers=cfg["workers"],
            )
            if cfg["front_matter"]:
                meta = {
                    "source": source,
                    "kind": kind,
                    "last_converted": datetime.now(timezone.utc).isoformat(timespec="seconds"),
                }
                md_body = write_front_matter_markdown(md_body, meta)

            with open(out_path, "w", encoding="utf-8") as f:
                f.write(md_body)
        except (ConverterError, OSError) as e:
            logging.warning(f"[{i}/{len(sources)}] ❌ {source} — {e}")
            fail += 1
            continue

        logging.info(f"[{i}/{len(sources)}] ✅ [{kind}] {source} → {out_path}")
        success += 1

    logging.info(f"Done. Success: {success}, Failed: {fail}")
    logging.info(f"Markdown → {cfg['paths']['processed_dir']}")
    return 0 if fail == 0 else 1


if __name__ == "__main__":
    raise SystemExit(main())
