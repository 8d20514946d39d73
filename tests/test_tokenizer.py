from narrator.core.tokenizer import tokenize


def test_basic_splitting() -> None:
    assert tokenize("this is a simple text") == ["this", "is", "a", "simple", "text"]
    assert tokenize("this-is-a-simple-text", separator="-") == ["this", "is", "a", "simple", "text"]


def test_multiple_separators_and_trimming() -> None:
    assert tokenize("this is  a   simple  text") == ["this", "is", "a", "simple", "text"]
    assert tokenize("this--is-a---simple--text", separator="-") == ["this", "is", "a", "simple", "text"]
    assert tokenize("  spaces  ") == ["spaces"]
    assert tokenize("") == []


def test_joined_text() -> None:
    assert tokenize('this "is a  simple" text') == ["this", "is a  simple", "text"]
    assert tokenize('this-"is a--simple"-text', separator="-") == ["this", "is a--simple", "text"]
    assert tokenize("this joiner \" doesn't close") == ["this", "joiner", '"', "doesn't", "close"]
    assert tokenize('joiner chars al"so sepa"rate') == ["joiner", "chars", "al", "so sepa", "rate"]
    assert tokenize('empty "" joiner') == ["empty", "", "joiner"]


def test_escaped_text() -> None:
    assert tokenize('this "is a \\"escaped" \\\\text') == ["this", 'is a "escaped', "\\text"]
    assert tokenize("this-|is-a-^|escaped|--text", escape="^", separator="-", joiner="|") == [
        "this",
        "is-a-|escaped",
        "text",
    ]
