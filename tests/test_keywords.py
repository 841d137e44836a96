from libcat.models import Title
from libcat.services.keywords import QueryToken, split_words, title_keywords, tokenize_query


def test_split_words_lowercases_and_drops_stop_words() -> None:
    assert split_words("Harry Potter and the Philosopher's Stone") == [
        "harry",
        "potter",
        "philosopher",
        "s",
        "stone",
    ]


def test_split_words_respects_custom_stop_words() -> None:
    assert split_words("The Time Machine", {"time"}) == ["the", "machine"]


def test_title_keywords_include_compound_keys() -> None:
    title = Title("A Tale of Two Cities", ["Charles Dickens"], 1859)
    keywords = title_keywords(title)
    assert {"tale", "two", "cities", "charles", "dickens", "1859"} <= keywords
    assert "a tale of two cities" in keywords
    assert "charles dickens" in keywords
    assert "a" not in keywords
    assert "of" not in keywords


def test_title_keywords_split_punctuated_author_names() -> None:
    title = Title("Harry Potter and the Deathly Hollows", ["J.K. Rowling"], 2007)
    keywords = title_keywords(title)
    assert {"j", "k", "rowling", "j.k. rowling"} <= keywords


def test_title_keywords_skip_blank_authors() -> None:
    title = Title("Emma", ["", "Jane Austen"], 1815)
    assert "" not in title_keywords(title)


def test_tokenize_query_separates_words_and_phrases() -> None:
    tokens = list(tokenize_query('dickens "two cities" 1859'))
    assert tokens == [
        QueryToken("dickens"),
        QueryToken("two cities", phrase=True),
        QueryToken("1859"),
    ]


def test_tokenize_query_skips_punctuation_and_lone_quotes() -> None:
    tokens = list(tokenize_query('J.K. Rowling, "unterminated'))
    assert [token.text for token in tokens] == ["J", "K", "Rowling", "unterminated"]
    assert not any(token.phrase for token in tokens)


def test_title_keywords_strip_padded_title_text() -> None:
    keywords = title_keywords(Title("  Dune ", ["Frank Herbert"], 1965))

    assert "dune" in keywords
    assert "  dune " not in keywords
