from __future__ import annotations
import base64
import json
import webbrowser
from dataclasses import asdict
from html import escape

from markdownify import markdownify as md

from .interfaces import ResultRenderer
from .models import ResultEntry, SearchResults

_PAGE = """<!DOCTYPE html>
<html>
  <head>
    <meta charset="UTF-8">
    <title>{query}</title>
    <style>
    .row {{ padding: 4px; }}
    .row:after {{ content: ""; display: table; clear: both; }}
    .column {{ padding: 4px; }}
    .left {{ float: left; width: 300px; }}
    .right {{ width: 100%; }}
    </style>
  </head>
  <body>
    <h2>{query}</h2>
{body}
  </body>
</html>
"""

_ENTRY = """    <hr/>
    <div class="row">
      <div class="column left">
        <img src="{image}">
      </div>
      <div class="column right">
        <a href="{href}"><h3>{title}</h3></a>
        Added: {datetime}<br/>
        Price: {price}<br/>
        {where}
      </div>
    </div>
"""


def _render_entry(e: ResultEntry) -> str:
    return _ENTRY.format(
        image=escape(e.image),
        href=escape(e.href),
        title=escape(e.title),
        datetime=escape(e.datetime),
        price=escape(e.price),
        # "近くの場所"があればそちらを優先
        where=escape(e.nearby_desc or e.neighborhood),
    )


def _render_body(results: SearchResults) -> str:
    if not results.entries:
        return "    No results\n"
    return "".join(_render_entry(e) for e in results.entries)


def render_html(results: SearchResults) -> str:
    return _PAGE.format(query=escape(results.query), body=_render_body(results))


def render_markdown(results: SearchResults) -> str:
    # head/styleは含めず、見出し以降だけを変換
    html = f"<h2>{escape(results.query)}</h2>\n{_render_body(results)}"
    return md(html, heading_style="ATX").strip()


def render_json(results: SearchResults) -> str:
    return json.dumps(asdict(results), ensure_ascii=False, indent=1)


class HtmlRenderer(ResultRenderer):
    def render(self, results: SearchResults) -> str:
        return render_html(results)


class MarkdownRenderer(ResultRenderer):
    def render(self, results: SearchResults) -> str:
        return render_markdown(results)


class JsonRenderer(ResultRenderer):
    def render(self, results: SearchResults) -> str:
        return render_json(results)


def html_data_url(html: str) -> str:
    encoded = base64.b64encode(html.encode("utf-8")).decode("ascii")
    return f"data:text/html;base64,{encoded}"


def open_in_browser(url: str) -> None:
    # macOSなどでは data: URL を開くアプリの割り当てが別途必要なことがある
    if not webbrowser.open(url):
        raise RuntimeError("could not open a web browser")
