"""
Blog Tools - Helpers for a static blog built from hand-written HTML posts

Modules:
- html_parser: Regex extraction of titles, meta tags and dates
- posts: posts.json manifest generation
- validator: Post file checks
- site: Fragment include and post list loading
- config: blog.yaml settings
"""

from .html_parser import (
    extract_meta_tag,
    extract_meta_property,
    extract_title,
    escape_for_display,
    is_valid_calendar_date,
    extract_leading_date,
)

from .config import SiteConfig, ConfigError, load_config

from .posts import (
    Post,
    PostProcessingError,
    process_post_file,
    build_posts,
    write_posts_json,
)

from .validator import (
    ValidationIssue,
    ValidationResult,
    PostValidator,
    validate_post_file,
    validate_directory,
)

__version__ = "0.1.0"

__all__ = [
    # Extraction
    'extract_meta_tag',
    'extract_meta_property',
    'extract_title',
    'escape_for_display',
    'is_valid_calendar_date',
    'extract_leading_date',
    # Configuration
    'SiteConfig',
    'ConfigError',
    'load_config',
    # Manifest generation
    'Post',
    'PostProcessingError',
    'process_post_file',
    'build_posts',
    'write_posts_json',
    # Validation
    'ValidationIssue',
    'ValidationResult',
    'PostValidator',
    'validate_post_file',
    'validate_directory',
]
