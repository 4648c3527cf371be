import pytest

from jenkins_matrix.util import TemplateUtil, fragments, parse_flag, parse_toggle


@pytest.mark.parametrize("seconds, text", [
    (0, "0 seconds"),
    (1, "1 second"),
    (83, "1 minute and 23 seconds"),
    (3723, "1 hour, 2 minutes and 3 seconds"),
    (2.5, "2.5 seconds"),
])
def test_format_time(seconds, text) -> None:
    assert TemplateUtil.format_time(seconds) == text


def test_join_human_list() -> None:
    assert TemplateUtil.join_human_list([]) == ""
    assert TemplateUtil.join_human_list(["a"]) == "a"
    assert TemplateUtil.join_human_list(["a", "b", "c"]) == "a, b and c"


@pytest.mark.parametrize("value, flag", [
    ("failure", "notify_failure"),
    ("back-to-normal", "notify_back_to_normal"),
    ("NOT_BUILT", "notify_not_built"),
    ("mention_all", "mention_all"),
])
def test_parse_flag(value, flag) -> None:
    assert parse_flag(value) == flag


def test_parse_flag_unknown() -> None:
    with pytest.raises(ValueError, match="expected one of"):
        parse_flag("explode")


def test_parse_toggle() -> None:
    assert parse_toggle("on") is True
    assert parse_toggle("OFF") is False
    with pytest.raises(ValueError):
        parse_toggle("maybe")


def test_open_link_fragment_escapes_url() -> None:
    link = fragments.render("open_link", url="https://ci.example.com/job/a&b/1/")
    assert link == " (<a href='https://ci.example.com/job/a&amp;b/1/'>Open</a>)"
