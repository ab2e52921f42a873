"""
Pytest configuration and shared fixtures
"""

import sys
from pathlib import Path

import pytest

# Make the src/ package importable without installing it
REPO_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(REPO_ROOT / "src"))


@pytest.fixture
def sample_post_html():
    """A post that passes every validator check"""
    return """<!DOCTYPE html>
<html lang="ja">
<head>
  <meta charset="utf-8">
  <title>テスト記事</title>
  <meta name="description" content="テスト説明">
  <meta name="date" content="2025-01-15">
  <meta name="tags" content="日記, 技術、Python">
  <meta name="cover" content="cover.png">
  <link rel="stylesheet" href="/my-blog/style.css">
  <script src="/my-blog/common.js" defer></script>
</head>
<body>
  <div id="site-header"></div>
  <main>
    <h1>テスト記事</h1>
    <p>本文</p>
  </main>
  <div id="site-footer"></div>
</body>
</html>
"""


@pytest.fixture
def posts_dir(tmp_path):
    """Empty posts/ directory inside a temporary blog root"""
    path = tmp_path / "posts"
    path.mkdir()
    return path
