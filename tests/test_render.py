import base64
import json

from craigs_search.models import ResultEntry, SearchResults
from craigs_search.render import (
    HtmlRenderer,
    JsonRenderer,
    MarkdownRenderer,
    html_data_url,
    render_html,
)


def _results():
    return SearchResults(
        query="bike (filter: road)",
        entries=[
            ResultEntry(
                title="Road <Bike>",
                href="https://sfbay.craigslist.org/1.html",
                image="https://images.craigslist.org/x_300x300.jpg",
                datetime="2021-03-01 10:15",
                neighborhood="(oakland)",
                price="$300",
            ),
            ResultEntry(title="Road Car", nearby_desc="(palo alto)"),
        ],
        next="/search/bia?s=120",
    )


def test_html_escapes_and_lists_entries():
    html = render_html(_results())
    assert "<title>bike (filter: road)</title>" in html
    assert "Road &lt;Bike&gt;" in html
    assert 'src="https://images.craigslist.org/x_300x300.jpg"' in html
    assert "Price: $300" in html
    assert "(oakland)" in html
    assert "(palo alto)" in html
    assert "No results" not in html


def test_html_no_results():
    html = HtmlRenderer().render(SearchResults(query="Results"))
    assert "No results" in html


def test_markdown_report():
    text = MarkdownRenderer().render(_results())
    assert text.startswith("## bike (filter: road)")
    assert "Road" in text
    assert "Price: $300" in text
    assert "https://sfbay.craigslist.org/1.html" in text
    assert "{" not in text


def test_json_dump():
    data = json.loads(JsonRenderer().render(_results()))
    assert data["query"] == "bike (filter: road)"
    assert data["next"] == "/search/bia?s=120"
    assert data["prev"] == ""
    assert data["entries"][0]["title"] == "Road <Bike>"
    assert data["entries"][1]["nearby_desc"] == "(palo alto)"


def test_data_url_roundtrip():
    url = html_data_url("<p>hi</p>")
    assert url.startswith("data:text/html;base64,")
    assert base64.b64decode(url.split(",", 1)[1]).decode("utf-8") == "<p>hi</p>"
