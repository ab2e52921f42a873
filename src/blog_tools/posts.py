#!/usr/bin/env python3
"""
Build the posts.json manifest from the HTML files in posts/.

Every post is read with the regex extractors in html_parser; posts are
written newest first. Run from the blog root:

    generate-posts-json
    generate-posts-json --posts-dir posts --output posts.json
"""

import argparse
import json
import re
import sys
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import List, Optional, Tuple

from .config import ConfigError, SiteConfig, load_config
from .html_parser import (
    extract_leading_date,
    extract_meta_property,
    extract_meta_tag,
    extract_title,
    is_valid_calendar_date,
)


@dataclass
class Post:
    """One entry in posts.json"""
    title: str
    url: str  # Site-relative, e.g. /my-blog/posts/2025-01-15-hello.html
    date: str  # YYYY-MM-DD
    excerpt: str = ""
    tags: list[str] = field(default_factory=list)
    cover: Optional[str] = None

    def to_dict(self) -> dict:
        # Field order is the key order in posts.json
        return asdict(self)


class PostProcessingError(Exception):
    """A post file could not be turned into a Post"""

    def __init__(self, message: str, filename: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.filename = filename
        self.cause = cause


def split_tags(text: Optional[str], separators: str = ",、，") -> List[str]:
    """Split a tags meta value on any separator character, keeping order"""
    if not text:
        return []
    pattern = "[" + re.escape(separators) + "]"
    return [tag.strip() for tag in re.split(pattern, text) if tag.strip()]


def resolve_cover(cover: Optional[str], config: SiteConfig) -> Optional[str]:
    """Turn a cover meta value into a site-relative or absolute URL"""
    if not cover:
        return None
    if cover.startswith(config.base_url):
        return cover
    if cover.startswith("http://") or cover.startswith("https://"):
        return cover
    if cover.startswith("images/"):
        return config.asset_url(cover)
    return f"{config.images_url}{cover}"


def process_post_file(filename: str, html: str, config: Optional[SiteConfig] = None) -> Post:
    """
    Build a Post from one HTML file.

    Raises PostProcessingError when there is no title or no valid date;
    anything unexpected is wrapped in PostProcessingError as well.
    """
    config = config or SiteConfig()

    try:
        title = extract_title(html)
        if not title:
            raise PostProcessingError("No title found", filename)

        date = extract_meta_tag(html, "date") or extract_leading_date(filename)
        if not is_valid_calendar_date(date):
            raise PostProcessingError(f"No valid date found: {date}", filename)

        excerpt = (extract_meta_tag(html, "description")
                   or extract_meta_property(html, "og:description")
                   or "")

        cover = extract_meta_tag(html, "cover") or extract_meta_property(html, "og:image")

        return Post(
            title=title,
            url=f"{config.posts_url}{filename}",
            date=date,
            excerpt=excerpt,
            tags=split_tags(extract_meta_tag(html, "tags"), config.tag_separators),
            cover=resolve_cover(cover, config),
        )

    except PostProcessingError:
        raise
    except Exception as e:
        raise PostProcessingError("Unexpected error while processing post", filename, e) from e


def find_post_files(posts_dir: Path, config: Optional[SiteConfig] = None) -> List[str]:
    """Sorted post filenames, skipping the post template"""
    config = config or SiteConfig()
    return sorted(
        p.name for p in Path(posts_dir).glob("*.html")
        if p.is_file() and not p.name.startswith(config.template_prefix)
    )


def build_posts(posts_dir: Path, config: Optional[SiteConfig] = None,
                verbose: bool = True) -> Tuple[List[Post], List[Tuple[str, str]]]:
    """
    Process every post file in posts_dir.

    Returns: (posts sorted newest first, [(filename, error message), ...])
    """
    config = config or SiteConfig()
    posts_dir = Path(posts_dir)

    posts = []
    failures = []

    for filename in find_post_files(posts_dir, config):
        if verbose:
            print(f"  Processing: {filename}")
        try:
            html = (posts_dir / filename).read_text(encoding="utf-8")
            post = process_post_file(filename, html, config)
        except (OSError, UnicodeDecodeError) as e:
            failures.append((filename, f"Failed to read file: {e}"))
            continue
        except PostProcessingError as e:
            failures.append((filename, str(e)))
            continue

        posts.append(post)
        if verbose:
            print(f"  Done: {post.title}")

    # sort() is stable, so equal dates keep filename order
    posts.sort(key=lambda p: p.date, reverse=True)
    return posts, failures


def write_posts_json(posts: List[Post], output_file: Path):
    """Write the manifest with stable key order and 2-space indent"""
    output_file = Path(output_file)
    output_file.parent.mkdir(parents=True, exist_ok=True)

    with open(output_file, "w", encoding="utf-8") as f:
        json.dump([post.to_dict() for post in posts], f, ensure_ascii=False, indent=2)
        f.write("\n")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Generate posts.json from posts/*.html")
    parser.add_argument("--root", type=Path, default=Path.cwd(), help="Blog root directory")
    parser.add_argument("--config", type=Path, help="Path to blog.yaml")
    parser.add_argument("--posts-dir", type=Path, help="Override the posts directory")
    parser.add_argument("--output", type=Path, help="Override the output JSON file")
    parser.add_argument("--quiet", action="store_true", help="Only print the summary")

    args = parser.parse_args(argv)

    try:
        config = load_config(args.config, root=args.root)
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 1

    posts_dir = args.posts_dir or args.root / config.posts_dir
    output_file = args.output or args.root / config.output_file

    print("Generating posts.json...")

    if not posts_dir.is_dir():
        print(f"Posts directory not found: {posts_dir}", file=sys.stderr)
        return 1

    if not find_post_files(posts_dir, config):
        print("No post files found")
        posts, failures = [], []
    else:
        posts, failures = build_posts(posts_dir, config, verbose=not args.quiet)

    try:
        write_posts_json(posts, output_file)
    except OSError as e:
        print(f"Failed to write {output_file}: {e}", file=sys.stderr)
        return 1

    if not posts and not failures:
        return 0

    print()
    print("=" * 60)
    print(f"Succeeded: {len(posts)}")
    print(f"Failed: {len(failures)}")

    if failures:
        print("\nFailed files:", file=sys.stderr)
        for filename, message in failures:
            print(f"  - {filename}: {message}", file=sys.stderr)
        return 1

    print(f"\nWrote {output_file} ({len(posts)} posts)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
