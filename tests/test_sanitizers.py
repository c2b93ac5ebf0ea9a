from apps.domains.posts.sanitizers import make_excerpt, sanitize_content, strip_markup


def test_sanitize_keeps_body_markup():
    html = '<h2>Heading</h2><p>Text with <a href="https://example.com">link</a></p><img src="https://x/y.png" alt="y">'

    cleaned = sanitize_content(html)

    assert "<h2>Heading</h2>" in cleaned
    assert 'href="https://example.com"' in cleaned
    assert "<img" in cleaned


def test_sanitize_drops_document_and_script_tags():
    cleaned = sanitize_content("<head><style>p{}</style></head><body><p>ok</p><script>bad()</script></body>")

    for tag in ("<head", "<style", "<body", "<script"):
        assert tag not in cleaned
    assert "<p>ok</p>" in cleaned


def test_strip_markup_collapses_whitespace():
    assert strip_markup("<p>one</p>\n\n<p>two &amp; three</p>") == "one two & three"


def test_make_excerpt():
    assert make_excerpt("<p>short</p>", 150) == "short"
    assert make_excerpt("<p>" + "a" * 200 + "</p>", 150) == "a" * 150 + "..."
