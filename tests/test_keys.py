"""Tests for URL to storage key mapping."""
from src.store.keys import find_key_collisions, url_to_key


def test_url_to_key_example():
    """Scheme stripped, separators replaced by '-'."""
    assert url_to_key("https://example.com/") == "example-com-"
    assert url_to_key("http://example.com/blog/post?id=1") == "example-com-blog-post-id-1"


def test_url_to_key_is_stable():
    """Same URL, same key."""
    url = "https://www.example.org/path/to/page"
    assert url_to_key(url) == url_to_key(url)
    assert url_to_key(url) == "www-example-org-path-to-page"


def test_url_to_key_only_strips_leading_scheme():
    """A scheme later in the URL is kept (as separators)."""
    assert url_to_key("https://example.com/?next=https://x.io") == "example-com--next-https---x-io"


def test_distinct_urls_distinct_keys():
    """A typical URL set maps one-to-one."""
    urls = [
        "https://example.com/",
        "https://example.com/about",
        "https://www.example.com/",
        "https://example.org/",
    ]
    keys = {url_to_key(u) for u in urls}
    assert len(keys) == len(urls)
    assert find_key_collisions(urls) == {}


def test_find_key_collisions():
    """Lossy pairs are reported, duplicates of one URL are not."""
    urls = ["https://a.b/", "https://a-b/", "https://c.d/", "https://c.d/"]
    assert find_key_collisions(urls) == {"a-b-": ["https://a.b/", "https://a-b/"]}
