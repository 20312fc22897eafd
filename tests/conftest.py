import pytest

from sitekit.content import ContentItem


@pytest.fixture
def make_item():
    def factory(input_path="_posts/post.md", raw="", **data):
        url = "/" + input_path.rsplit(".", 1)[0] + "/"
        return ContentItem(input_path=input_path, url=url, raw=raw, html=raw, data=data)

    return factory
