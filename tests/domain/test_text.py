from __future__ import annotations

from flagwatch.domain.classification import html_to_text, message_text


def test_html_to_text_keeps_line_structure() -> None:
    html = (
        "<html><head><title>Alert</title><style>p {color: red}</style></head>"
        "<body><p>Flags at half-staff</p><div>in honor of Jane Doe<br>December 10</div>"
        "<script>track()</script></body></html>"
    )

    text = html_to_text(html)

    assert text.splitlines() == ["Flags at half-staff", "in honor of Jane Doe", "December 10"]


def test_html_to_text_collapses_blank_runs() -> None:
    html = "<p>One</p><p></p><p></p><p></p><p>Two</p>"

    assert html_to_text(html) == "One\n\nTwo"


def test_message_text_prefers_html() -> None:
    assert message_text(html="<p>From HTML</p>", plain="From plain") == "From HTML"
    assert message_text(html="   ", plain="  From plain \n") == "From plain"
    assert message_text(html=None, plain=None) == ""
