"""Tests for config.py — blog.yaml loading."""

import pytest

from blog_tools.config import ConfigError, SiteConfig, load_config


class TestSiteConfig:

    def test_defaults(self):
        config = SiteConfig()
        assert config.base_url == '/my-blog/'
        assert config.posts_url == '/my-blog/posts/'
        assert config.images_url == '/my-blog/images/'
        assert config.posts_json_url == '/my-blog/posts.json'
        assert config.layout_element_ids == ['site-header', 'site-footer']

    def test_layout_element_ids_add_extras_once(self):
        config = SiteConfig(header_element_id='top', required_element_ids=['top', 'comments'])
        assert config.layout_element_ids == ['top', 'site-footer', 'comments']

    def test_asset_url(self):
        assert SiteConfig().asset_url('/style.css') == '/my-blog/style.css'

    def test_from_yaml_overrides(self):
        config = SiteConfig.from_yaml('lang: en\ntitle_max_length: 70\n')
        assert config.lang == 'en'
        assert config.title_max_length == 70
        assert config.description_max_length == 160

    def test_base_url_gets_trailing_slash(self):
        assert SiteConfig.from_yaml('base_url: /blog').base_url == '/blog/'

    def test_empty_yaml_is_defaults(self):
        assert SiteConfig.from_yaml('') == SiteConfig()

    def test_unknown_key(self):
        with pytest.raises(ConfigError, match='Unknown config keys: colour'):
            SiteConfig.from_yaml('colour: blue\n')

    def test_not_a_mapping(self):
        with pytest.raises(ConfigError):
            SiteConfig.from_yaml('- a\n- b\n')

    def test_invalid_yaml(self):
        with pytest.raises(ConfigError):
            SiteConfig.from_yaml('lang: [unclosed\n')

    @pytest.mark.parametrize('text, message', [
        ('base_url: 5\n', 'base_url must be a string'),
        ('base_url: null\n', 'base_url must be a string'),
        ('title_max_length: "60"\n', 'title_max_length must be an integer'),
        ('description_max_length: true\n', 'description_max_length must be an integer'),
        ('required_element_ids: comments\n', 'required_element_ids must be a list of strings'),
        ('required_element_ids: [1, 2]\n', 'required_element_ids must be a list of strings'),
    ])
    def test_wrong_value_types(self, text, message):
        with pytest.raises(ConfigError, match=message):
            SiteConfig.from_yaml(text)

    def test_yaml_round_trip(self):
        config = SiteConfig(lang='en', required_element_ids=['header'])
        assert SiteConfig.from_yaml(config.to_yaml()) == config


class TestLoadConfig:

    def test_missing_default_file(self, tmp_path):
        assert load_config(root=tmp_path) == SiteConfig()

    def test_default_file_in_root(self, tmp_path):
        (tmp_path / 'blog.yaml').write_text('lang: en\n', encoding='utf-8')
        assert load_config(root=tmp_path).lang == 'en'

    def test_explicit_path_must_exist(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(tmp_path / 'nope.yaml')

    def test_unreadable_path(self, tmp_path):
        config_dir = tmp_path / 'blog.yaml'
        config_dir.mkdir()
        with pytest.raises(ConfigError, match='Failed to read'):
            load_config(root=tmp_path)
