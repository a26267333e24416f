from stores.base import Task
from core.task_resolver import find_task, sample_titles


def _tasks(*titles):
    return [Task(id=str(index), title=title, position=index) for index, title in enumerate(titles, start=1)]


def test_exact_match_beats_earlier_substring_match():
    tasks = _tasks("🛒 Buy milk and eggs", "Buy milk")
    assert find_task("buy milk", tasks).id == "2"


def test_match_ignores_case_and_spacing():
    tasks = _tasks("Write   Report")
    assert find_task("  write report ", tasks).id == "1"


def test_substring_match_returns_first_in_order():
    tasks = _tasks("Call mom", "Call dentist", "Call plumber")
    assert find_task("call", tasks).id == "1"
    assert find_task("dent", tasks).id == "2"


def test_emoji_in_query_is_ignored_on_last_stage():
    tasks = _tasks("Ship release")
    assert find_task("🚀 Ship", tasks).id == "1"


def test_query_without_emoji_matches_emoji_title():
    tasks = _tasks("🚀 Ship release")
    assert find_task("ship release", tasks).id == "1"


def test_no_match_returns_none():
    tasks = _tasks("Ship release")
    assert find_task("Buy milk", tasks) is None
    assert find_task("", tasks) is None
    assert find_task("🚀", tasks) is None
    assert find_task("anything", []) is None


def test_sample_titles_limits_suggestions():
    tasks = _tasks("A", "B", "C", "D")
    assert sample_titles(tasks) == ["A", "B", "C"]
    assert sample_titles(tasks, limit=1) == ["A"]
    assert sample_titles([]) == []
