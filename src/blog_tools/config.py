"""
Site configuration for the blog tooling.

Defaults match the layout of the blog itself (posts/ under /my-blog/,
Japanese pages). A blog.yaml at the repo root can override any field:

    base_url: /my-blog/
    posts_dir: posts
    title_max_length: 60
    header_element_id: site-header
    required_element_ids: [comments]
"""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional
import yaml


DEFAULT_CONFIG_FILE = "blog.yaml"


class ConfigError(Exception):
    """Raised when blog.yaml cannot be used"""


@dataclass
class SiteConfig:
    """Paths, URLs and validation thresholds for one blog"""
    posts_dir: str = "posts"
    output_file: str = "posts.json"
    base_url: str = "/my-blog/"
    template_prefix: str = "post-template"  # Skipped when scanning posts
    lang: str = "ja"
    title_max_length: int = 60
    description_max_length: int = 160
    required_stylesheet: str = "style.css"
    required_script: str = "common.js"
    header_element_id: str = "site-header"  # Filled with header_fragment
    footer_element_id: str = "site-footer"  # Filled with footer_fragment
    required_element_ids: list[str] = field(default_factory=list)  # Extra ids every post needs
    header_fragment: str = "header.html"
    footer_fragment: str = "footer.html"
    tag_separators: str = ",、，"

    def asset_url(self, name: str) -> str:
        """Site-relative URL of a file under base_url"""
        return f"{self.base_url}{name.lstrip('/')}"

    @property
    def layout_element_ids(self) -> list[str]:
        """Header and footer ids, then any extra required ids"""
        ids = [self.header_element_id, self.footer_element_id]
        ids += [i for i in self.required_element_ids if i not in ids]
        return ids

    @property
    def posts_url(self) -> str:
        return self.asset_url("posts/")

    @property
    def images_url(self) -> str:
        return self.asset_url("images/")

    @property
    def posts_json_url(self) -> str:
        return self.asset_url(Path(self.output_file).name)

    @classmethod
    def from_yaml(cls, yaml_content: str) -> 'SiteConfig':
        """Parse from YAML content, starting from the defaults."""
        try:
            data = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML: {e}") from e

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError("Config must be a mapping of settings")

        known = {f.name for f in fields(cls)}
        unknown = sorted(str(key) for key in set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")

        for f in fields(cls):
            if f.name in data:
                _check_type(f.name, data[f.name], f.type)

        config = cls(**data)
        if not config.base_url.endswith("/"):
            config.base_url += "/"
        return config

    def to_yaml(self) -> str:
        """Serialize to YAML for blog.yaml."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        return yaml.dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)


def _check_type(key: str, value, field_type):
    """Raise ConfigError unless value fits a str, int or list[str] field"""
    if field_type in (str, 'str'):
        if not isinstance(value, str):
            raise ConfigError(f"{key} must be a string")
    elif field_type in (int, 'int'):
        # bool is a subclass of int
        if not isinstance(value, int) or isinstance(value, bool):
            raise ConfigError(f"{key} must be an integer")
    elif not (isinstance(value, list) and all(isinstance(v, str) for v in value)):
        raise ConfigError(f"{key} must be a list of strings")


def load_config(path: Optional[Path] = None, root: Optional[Path] = None) -> SiteConfig:
    """
    Load the site config.

    An explicit path must exist; otherwise blog.yaml under root (or the
    working directory) is used when present, and the defaults when not.
    """
    if path is not None:
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
    else:
        path = Path(root or Path.cwd()) / DEFAULT_CONFIG_FILE
        if not path.exists():
            return SiteConfig()

    try:
        with open(path, encoding="utf-8") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Failed to read {path}: {e}") from e

    return SiteConfig.from_yaml(content)
