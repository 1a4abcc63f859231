import pytest

import catalog


def test_every_language_has_all_difficulties():
    for language in catalog.LANGUAGES:
        for difficulty in catalog.DIFFICULTIES:
            snippet = catalog.get_snippet(language, difficulty)
            assert snippet.text
            assert (snippet.language, snippet.difficulty) == (language, difficulty)


def test_unknown_snippet_raises():
    with pytest.raises(KeyError):
        catalog.get_snippet("python", "extreme")


def test_lesson_counts():
    counts = {key: len(catalog.lessons_for(key)) for key in catalog.LANGUAGES}
    assert counts == {"c": 6, "cpp": 4, "python": 5, "java": 3, "javascript": 5}


def test_lesson_ids_are_unique_and_prefixed():
    ids = [lesson.id for lessons in catalog.LESSONS.values() for lesson in lessons]
    assert len(ids) == len(set(ids))
    assert all(lesson.id.startswith("js-") for lesson in catalog.lessons_for("javascript"))


def test_snippets_are_immutable():
    snippet = catalog.get_snippet("c", "easy")
    with pytest.raises(AttributeError):
        snippet.text = "changed"


def test_random_quote_from_list():
    assert catalog.random_quote() in catalog.MOTIVATIONAL_QUOTES
