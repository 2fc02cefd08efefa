import re
import pytest
from datetime import datetime
from contenthub.common import seo, slug

def test_slug_strips_diacritics_and_collapses_separators():
    assert slug.generate("Árbol de Navidad!!") == "arbol-de-navidad"
    assert slug.generate("  --Hello,   World--  ") == "hello-world"
    assert slug.generate("") == ""

def test_slug_with_timestamp_keeps_base():
    value = slug.generate_with_timestamp("Nuevo Post")
    base, _, stamp = value.rpartition("-")
    assert base == "nuevo-post"
    assert stamp.isdigit()

def test_unique_slug_appends_counter():
    assert slug.generate_unique("Hola Mundo", []) == "hola-mundo"
    assert slug.generate_unique("Hola Mundo", ["hola-mundo"]) == "hola-mundo-1"
    assert slug.generate_unique("Hola Mundo", ["hola-mundo", "hola-mundo-1"]) == "hola-mundo-2"

def test_description_is_cut_on_word_boundary():
    content = "<p>" + "palabra " * 40 + "</p>"
    description = seo.generate_description(content, max_length=50)
    assert description.endswith("...")
    assert len(description) <= 53
    assert "<p>" not in description
    assert not description[:-3].endswith(" ")

def test_short_content_is_returned_as_plain_text():
    assert seo.generate_description("<b>Hi</b> &amp; bye") == "Hi & bye"

def test_json_ld_skips_empty_fields():
    published = datetime(2024, 5, 1, 12, 0, 0)
    json_ld = seo.generate_json_ld(
        title="Launch",
        url="http://testserver/launch",
        author="Ada Writer",
        date_published=published,
        type="WebPage",
    )
    assert json_ld["@context"] == "https://schema.org"
    assert json_ld["@type"] == "WebPage"
    assert json_ld["headline"] == "Launch"
    assert json_ld["author"] == {"@type": "Person", "name": "Ada Writer"}
    assert json_ld["datePublished"] == "2024-05-01T12:00:00"
    assert "image" not in json_ld
    assert "description" not in json_ld

def test_title_with_site_name():
    assert seo.generate_title("About", "ContentHub") == "About | ContentHub"
    assert seo.generate_title("About") == "About"

SLUG_INPUTS = [
    "Árbol de Navidad!!",
    "Ñandú Über Straße",
    "crème brûlée, s'il vous plaît",
    "!!!",
    "¿?¡!",
    "",
    "   ",
    "already-a-slug",
    "a--b__c",
    "--edge--",
    "MiXeD 123 Case",
    "日本語",
]

@pytest.mark.parametrize("text", SLUG_INPUTS)
def test_slug_is_idempotent(text):
    once = slug.generate(text)
    assert slug.generate(once) == once
    assert re.fullmatch(r"([a-z0-9]+(-[a-z0-9]+)*)?", once)

@pytest.mark.parametrize("text", SLUG_INPUTS)
@pytest.mark.parametrize("taken", [
    [],
    ["arbol-de-navidad", "arbol-de-navidad-1"],
    ["", "-1", "already-a-slug", "already-a-slug-1", "already-a-slug-2"],
    [f"mixed-123-case-{n}" for n in range(1, 5)] + ["mixed-123-case"],
])
def test_unique_slug_is_never_taken(text, taken):
    assert slug.generate_unique(text, taken) not in taken
