import pytest

import main
from craigs_search.models import ResultEntry, SearchResults


def test_options_from_args_defaults():
    args = main.parse_args(["road", "bike"])
    opts = main.options_from_args(args)
    assert opts.query == "road bike"
    assert opts.region == "sfbay"
    assert opts.subregion is None
    assert opts.category == "sss"
    assert opts.bundle_duplicates is True
    assert opts.has_pictures is True
    assert opts.title_only is False
    assert opts.sort is None


def test_options_from_args_flags():
    args = main.parse_args(
        [
            "--subregion", "eby",
            "--cat", "bikes",
            "--no-dedup",
            "--no-pictures",
            "--titles",
            "--today",
            "--min", "100",
            "--max", "500",
            "--sort", "priceasc",
            "sofa",
        ]
    )
    opts = main.options_from_args(args)
    assert opts.subregion == "eby"
    assert opts.category == "bia"
    assert opts.bundle_duplicates is False
    assert opts.has_pictures is False
    assert opts.title_only is True
    assert opts.posted_today is True
    assert (opts.min_price, opts.max_price) == (100, 500)
    assert opts.sort == "priceasc"


def test_output_modes_are_exclusive():
    with pytest.raises(SystemExit):
        main.parse_args(["--html", "--markdown", "x"])


def test_main_prints_json(monkeypatch, capsys):
    async def fake_search(args):
        return SearchResults(query="bike", entries=[ResultEntry(title="Bike")])

    monkeypatch.setattr(main, "search", fake_search)
    assert main.main(["bike"]) == 0
    out = capsys.readouterr().out
    assert '"title": "Bike"' in out


def test_main_reports_filter_error(monkeypatch, capsys):
    from craigs_search.filters import FilterPatternError

    async def fake_search(args):
        raise FilterPatternError("invalid filter pattern: missing )")

    monkeypatch.setattr(main, "search", fake_search)
    assert main.main(["--filter", "(bike", "bike"]) == 1
    assert "ERROR" in capsys.readouterr().out


def test_pick_renderer():
    from craigs_search.render import HtmlRenderer, JsonRenderer, MarkdownRenderer

    assert isinstance(main.pick_renderer(main.parse_args(["x"])), JsonRenderer)
    assert isinstance(
        main.pick_renderer(main.parse_args(["--html", "x"])), HtmlRenderer
    )
    assert isinstance(
        main.pick_renderer(main.parse_args(["--browse", "x"])), HtmlRenderer
    )
    assert isinstance(
        main.pick_renderer(main.parse_args(["--markdown", "x"])), MarkdownRenderer
    )


def test_output_markdown(capsys):
    args = main.parse_args(["--markdown", "bike"])
    main.output(args, SearchResults(query="bike", entries=[ResultEntry(title="Bike")]))
    assert capsys.readouterr().out.startswith("## bike")


def test_output_browse_opens_data_url(monkeypatch):
    opened = []
    monkeypatch.setattr(main, "open_in_browser", opened.append)
    args = main.parse_args(["--browse", "bike"])
    main.output(args, SearchResults(query="bike"))
    assert len(opened) == 1
    assert opened[0].startswith("data:text/html;base64,")
