"""Tests for HTML report and dashboard rendering."""
import asyncio
from datetime import datetime

from selectolax.parser import HTMLParser

from src.measure.compare import compare
from src.measure.models import Slot, Snapshot
from src.report.html_report import HtmlReportRenderer, format_delta, render_html, score_class
from src.report.index import display_name, generate_index, render_index


def snapshot(url="https://example.com/", performance=90, accessibility=70, runs=3) -> Snapshot:
    return Snapshot(
        url=url,
        runs=runs,
        performance=performance,
        accessibility=accessibility,
        best_practices=95,
        seo=40,
    )


def test_score_class_thresholds():
    """90+ good, 50+ needs improvement, else poor."""
    assert score_class(100) == "good"
    assert score_class(90) == "good"
    assert score_class(89) == "needs-improvement"
    assert score_class(50) == "needs-improvement"
    assert score_class(49) == "poor"


def test_format_delta():
    """Signs and classes for deltas."""
    assert format_delta(None) == "N/A"
    assert format_delta(5) == '<span class="positive">+5</span>'
    assert format_delta(-3) == '<span class="negative">-3</span>'
    assert format_delta(0) == '<span class="neutral">0</span>'


def test_report_with_baseline():
    """Cards and comparison table show baseline and change."""
    current = snapshot(performance=90)
    baseline = snapshot(performance=85, accessibility=75)
    tree = HTMLParser(render_html(current, baseline, compare(current, baseline)))

    assert tree.css_first("h2").text() == "https://example.com/"
    rows = tree.css("tbody tr")
    assert len(rows) == 4
    cells = [td.text() for td in rows[0].css("td")]
    assert cells == ["Performance", "85", "90", "+5"]
    assert [td.text() for td in rows[1].css("td")][-1] == "-5"
    assert tree.css_first("tbody .positive").text() == "+5"


def test_report_without_baseline():
    """No table, a hint to create a baseline, and N/A deltas."""
    html = render_html(snapshot(), None, None)
    tree = HTMLParser(html)

    assert tree.css_first("table") is None
    assert "--update-baseline" in tree.body.text()
    assert "Delta: N/A" in tree.css_first(".metric").text()


def test_report_flags_low_confidence():
    """Fewer runs than requested is marked in the header."""
    tree = HTMLParser(render_html(snapshot(runs=1), None, None, expected_runs=3))
    assert tree.css_first(".low-confidence") is not None
    assert "1 of 3" in tree.css_first(".runs").text()

    tree = HTMLParser(render_html(snapshot(runs=3), None, None, expected_runs=3))
    assert tree.css_first(".low-confidence") is None


def test_report_escapes_url():
    """URLs are HTML-escaped."""
    html = render_html(snapshot(url="https://example.com/?q=<script>"), None, None)
    assert "<script>" not in html


def test_renderer_writes_file(tmp_path):
    """The renderer writes reports/<key>.html."""
    renderer = HtmlReportRenderer(reports_dir=tmp_path / "reports", expected_runs=3)
    path = asyncio.run(renderer.render(snapshot(), None, None))
    assert path == tmp_path / "reports" / "example-com-.html"
    assert "PageSpeed Report" in path.read_text(encoding="utf-8")


def test_display_name():
    """Host only for the root path."""
    assert display_name("https://example.com/") == "example.com"
    assert display_name("https://example.com") == "example.com"
    assert display_name("https://example.com/blog") == "example.com/blog"


def test_index_averages_and_cards():
    """Stats average across URLs; one card per snapshot."""
    snapshots = [
        snapshot(url="https://a.example/", performance=90),
        snapshot(url="https://b.example/docs", performance=71),
    ]
    tree = HTMLParser(render_index(snapshots, generated_at=datetime(2025, 1, 1)))

    numbers = [n.text() for n in tree.css(".stat-number")]
    assert numbers == ["81", "70", "95", "40"]
    titles = [t.text() for t in tree.css(".report-title")]
    assert titles == ["a.example", "b.example/docs"]
    links = [a.attributes["href"] for a in tree.css("a.view-report")]
    assert links == ["a-example-.html", "b-example-docs.html"]


def test_index_without_reports():
    """Empty dashboard shows a placeholder."""
    tree = HTMLParser(render_index([]))
    assert tree.css_first(".no-reports") is not None
    assert tree.css_first(".stats") is None


def test_generate_index(repository, tmp_path):
    """Reports are copied to docs and index.html is written."""
    reports_dir = tmp_path / "reports"
    renderer = HtmlReportRenderer(reports_dir=reports_dir)
    current = snapshot()

    async def scenario():
        await repository.save(Slot.LATEST, current)
        await renderer.render(current, None, None)
        return await generate_index(repository, reports_dir, tmp_path / "docs")

    index_path = asyncio.run(scenario())
    assert index_path == tmp_path / "docs" / "index.html"
    assert (tmp_path / "docs" / "example-com-.html").exists()
    tree = HTMLParser(index_path.read_text(encoding="utf-8"))
    assert tree.css_first(".report-title").text() == "example.com"
