from httpfacade import build_query, parse_query


def test_build_query_empty():
    assert build_query({}) == ""


def test_build_query_escapes_reserved_characters():
    assert build_query({"k": "a b+c%"}) == "k=a+b%2Bc%25"
    assert build_query({"k": "-._~"}) == "k=-._~"


def test_parse_query_plain():
    assert parse_query("a=1&b=two+words&c=%26") == {"a": "1", "b": "two words", "c": "&"}


def test_parse_query_leading_question_mark_and_blanks():
    assert parse_query("?a=1&&b=") == {"a": "1", "b": ""}


def test_parse_query_last_duplicate_wins():
    assert parse_query("a=1&a=2") == {"a": "2"}


def test_parse_query_brackets():
    assert parse_query("user[name]=Ada&user[roles][]=x&user[roles][]=y") == {
        "user": {"name": "Ada", "roles": ["x", "y"]}
    }


def test_parse_query_indexed_list():
    assert parse_query("ids%5B0%5D=1&ids%5B1%5D=2") == {"ids": ["1", "2"]}


def test_parse_query_malformed_bracket_kept_verbatim():
    assert parse_query("a[b=1") == {"a[b": "1"}


def test_nested_round_trip():
    data = {"ids": ["1", "2"], "user": {"name": "Ada", "tags": ["x"]}}
    assert parse_query(build_query(data)) == data


def test_parse_query_nesting_is_capped():
    parsed = parse_query("a" + "[b]" * 5000 + "=1")
    node = parsed["a"]
    for _ in range(63):
        node = node["b"]
    assert node == {"b" + "[b]" * 4936: "1"}


def test_parse_query_appends_to_nested_list():
    assert parse_query("a[x][]=1&a[x][]=2") == {"a": {"x": ["1", "2"]}}
