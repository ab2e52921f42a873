#!/usr/bin/env python3
"""
Validation for blog post HTML files

Checks each post in posts/ for the pieces the site relies on:
1. Document structure - DOCTYPE, lang attribute, layout placeholders
2. Metadata - title, description and date meta tags
3. Assets - shared stylesheet/script references and image paths

Errors fail the run; warnings are reported but do not.
"""

import argparse
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from bs4 import BeautifulSoup

from .config import ConfigError, SiteConfig, load_config
from .html_parser import extract_meta_tag, extract_title, is_valid_calendar_date
from .posts import find_post_files


@dataclass
class ValidationIssue:
    """Represents a validation problem"""
    severity: str  # 'error', 'warning'
    message: str
    location: Optional[str] = None  # e.g. an image src


@dataclass
class ValidationResult:
    """Result of validation checks for one post"""
    valid: bool
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == 'error']

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == 'warning']


class PostValidator:
    """Validates a single post file against the site conventions"""

    def __init__(self, config: Optional[SiteConfig] = None, repo_root: Optional[Path] = None):
        self.config = config or SiteConfig()
        self.repo_root = Path(repo_root) if repo_root else None

    def validate(self, filename: str, html) -> ValidationResult:
        """Run all checks"""
        if not html or not isinstance(html, str):
            return ValidationResult(
                valid=False,
                issues=[ValidationIssue('error', 'HTML content is empty or invalid', filename)]
            )

        issues = []
        issues.extend(self._check_document(html))
        issues.extend(self._check_title(html))
        issues.extend(self._check_description(html))
        issues.extend(self._check_date(html))
        issues.extend(self._check_assets(html))
        issues.extend(self._check_images(html))

        valid = not any(issue.severity == 'error' for issue in issues)
        return ValidationResult(valid=valid, issues=issues)

    def _check_document(self, html: str) -> List[ValidationIssue]:
        issues = []

        if '<!doctype html>' not in html.lower():
            issues.append(ValidationIssue('error', 'Missing DOCTYPE declaration'))

        if f'<html lang="{self.config.lang}">' not in html:
            issues.append(ValidationIssue(
                'warning', f'<html> element is missing lang="{self.config.lang}"'
            ))

        for element_id in self.config.layout_element_ids:
            if f'id="{element_id}"' not in html:
                issues.append(ValidationIssue('error', f'Missing #{element_id} element'))

        return issues

    def _check_title(self, html: str) -> List[ValidationIssue]:
        title = extract_title(html)
        if not title:
            return [ValidationIssue('error', 'Missing or empty title')]

        limit = self.config.title_max_length
        if len(title) > limit:
            return [ValidationIssue(
                'warning', f'Title is too long ({len(title)} chars): {title[:50]}...'
            )]
        return []

    def _check_description(self, html: str) -> List[ValidationIssue]:
        description = extract_meta_tag(html, 'description')
        if not description:
            return [ValidationIssue('error', 'Missing meta name="description"')]

        limit = self.config.description_max_length
        if len(description) > limit:
            return [ValidationIssue(
                'warning', f'Description is too long ({len(description)} chars)'
            )]
        return []

    def _check_date(self, html: str) -> List[ValidationIssue]:
        date = extract_meta_tag(html, 'date')
        if not date:
            return [ValidationIssue('warning', 'Missing meta name="date"')]
        if not is_valid_calendar_date(date):
            return [ValidationIssue(
                'error', f'Invalid date: {date} (expected YYYY-MM-DD)'
            )]
        return []

    def _check_assets(self, html: str) -> List[ValidationIssue]:
        issues = []

        stylesheet = self.config.asset_url(self.config.required_stylesheet)
        if f'href="{stylesheet}"' not in html:
            issues.append(ValidationIssue('error', f'Missing stylesheet link to {stylesheet}'))

        script = self.config.asset_url(self.config.required_script)
        if f'src="{script}"' not in html:
            issues.append(ValidationIssue('error', f'Missing script reference to {script}'))

        return issues

    def _check_images(self, html: str) -> List[ValidationIssue]:
        issues = []
        soup = BeautifulSoup(html, 'html.parser')
        images_url = self.config.images_url

        for img in soup.find_all('img', src=True):
            src = img['src'].strip()
            if src.startswith(images_url):
                if self.repo_root is None:
                    continue
                root = self.repo_root.resolve()
                image_path = (root / src[len(self.config.base_url):]).resolve()
                if not image_path.is_relative_to(root):
                    issues.append(ValidationIssue(
                        'warning', 'Image path leaves the site root', src
                    ))
                elif not image_path.exists():
                    issues.append(ValidationIssue('warning', 'Image not found', src))
            elif not src.startswith('http'):
                issues.append(ValidationIssue(
                    'warning', f'Image path should start with {images_url}', src
                ))

        return issues


def validate_post_file(filename: str, html, config: Optional[SiteConfig] = None,
                       repo_root: Optional[Path] = None) -> ValidationResult:
    """Validate one post's HTML"""
    return PostValidator(config, repo_root).validate(filename, html)


def validate_directory(posts_dir: Path, config: Optional[SiteConfig] = None,
                       repo_root: Optional[Path] = None) -> List[Tuple[str, ValidationResult]]:
    """Validate every post file in posts_dir, in filename order"""
    validator = PostValidator(config, repo_root)
    posts_dir = Path(posts_dir)
    results = []

    for filename in find_post_files(posts_dir, validator.config):
        try:
            html = (posts_dir / filename).read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            results.append((filename, ValidationResult(
                valid=False,
                issues=[ValidationIssue('error', f'Failed to read file: {e}')]
            )))
            continue
        results.append((filename, validator.validate(filename, html)))

    return results


def _format_issue(issue: ValidationIssue) -> str:
    if issue.location:
        return f"{issue.message}: {issue.location}"
    return issue.message


def print_report(results: List[Tuple[str, ValidationResult]]) -> Tuple[int, int]:
    """Print per-file issues and a summary. Returns (total errors, total warnings)"""
    total_errors = 0
    total_warnings = 0

    for filename, result in results:
        print(f"Checking: {filename}")
        errors = result.errors
        warnings = result.warnings

        if errors:
            print(f"  Errors ({len(errors)}):")
            for issue in errors:
                print(f"    - {_format_issue(issue)}")
        if warnings:
            print(f"  Warnings ({len(warnings)}):")
            for issue in warnings:
                print(f"    - {_format_issue(issue)}")
        if not errors and not warnings:
            print("  OK")
        print()

        total_errors += len(errors)
        total_warnings += len(warnings)

    print("=" * 60)
    print(f"Files checked: {len(results)}")
    print(f"Errors: {total_errors}")
    print(f"Warnings: {total_warnings}")

    return total_errors, total_warnings


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description='Validate blog post HTML files')
    parser.add_argument('--root', type=Path, default=Path.cwd(), help='Blog root directory')
    parser.add_argument('--config', type=Path, help='Path to blog.yaml')
    parser.add_argument('--posts-dir', type=Path, help='Override the posts directory')

    args = parser.parse_args(argv)

    try:
        config = load_config(args.config, root=args.root)
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 1

    posts_dir = args.posts_dir or args.root / config.posts_dir
    if not posts_dir.is_dir():
        print(f"Posts directory not found: {posts_dir}", file=sys.stderr)
        return 1

    print("Validating post files...\n")
    results = validate_directory(posts_dir, config, repo_root=args.root)

    if not results:
        print("No post files found")
        return 0

    total_errors, total_warnings = print_report(results)

    if total_errors:
        print("\nErrors found. Please fix them.")
        return 1
    if total_warnings:
        print("\nWarnings found, but nothing is broken.")
    else:
        print("\nAll files are valid!")
    return 0


if __name__ == '__main__':
    sys.exit(main())
