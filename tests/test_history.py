import io

from menushell.history import History


def _filled(size, items):
    history = History(size)
    for item in items:
        history.new_command(item)
    return history


def test_not_full():
    history = _filled(10, ["item1", "item2", "item3", "item4"])
    assert history.next() == ""
    assert history.previous("") == "item4"
    assert history.next() == ""
    assert history.previous("") == "item4"
    assert history.previous("item4") == "item3"
    assert history.previous("item3") == "item2"
    assert history.previous("item2") == "item1"
    assert history.previous("item1") == "item1"


def test_full():
    history = _filled(3, ["item1", "item2", "item3", "item4"])
    assert history.previous("") == "item4"
    assert history.next() == ""
    assert history.previous("") == "item4"
    assert history.previous("item4") == "item3"
    assert history.previous("item3") == "item3"
    assert history.previous("item3") == "item3"
    assert history.previous("item3") == "item3"
    assert history.next() == "item4"
    assert history.next() == ""


def test_insertion():
    history = _filled(10, ["item1", "item2", "item3", "item4"])
    assert history.previous("") == "item4"
    assert history.previous("item4") == "item3"
    assert history.previous("foo") == "item2"
    assert history.next() == "foo"
    assert history.next() == "item4"
    assert history.previous("item4") == "foo"
    assert history.previous("foo") == "item2"

    history.new_command("item5")

    assert history.previous("") == "item5"
    assert history.previous("item5") == "item4"
    assert history.next() == "item5"
    assert history.next() == ""


def test_insertion_ignore_repeat():
    history = _filled(
        10,
        ["item1", "item2", "item2", "item1", "item1", "item3",
         "item3", "item3", "item1", "item1", "item1"],
    )
    assert history.previous("") == "item1"
    assert history.previous("item1") == "item3"
    assert history.previous("item3") == "item1"
    assert history.previous("item1") == "item2"
    assert history.previous("item2") == "item1"
    assert history.next() == "item2"
    assert history.next() == "item1"
    assert history.next() == "item3"
    assert history.next() == "item1"


def test_empty():
    history = History(10)
    assert history.next() == ""
    assert history.previous("") == ""

    history2 = History(10)
    assert history2.previous("") == ""
    assert history2.next() == ""

    history3 = History(10)
    assert history3.previous("") == ""
    history3.new_command("item1")
    assert history3.next() == ""
    assert history3.previous("") == "item1"


def test_copies_loaded_commands():
    history = History(10)
    history.load_commands(["item1", "item2", "item3"])

    assert history.previous("") == "item3"
    assert history.previous("item3") == "item2"
    assert history.previous("item2") == "item1"
    assert history.previous("item1") == "item1"

    history.new_command("itemA")
    history.new_command("itemB")

    assert history.previous("") == "itemB"
    assert history.previous("itemB") == "itemA"
    assert history.previous("itemA") == "item3"
    assert history.previous("item3") == "item2"
    assert history.previous("item2") == "item1"

    assert history.get_commands() == ["itemA", "itemB"]


def test_copies_small_buffer():
    history = History(3)
    history.load_commands(["item1", "item2", "item3"])

    assert history.previous("") == "item3"
    assert history.previous("item3") == "item2"
    assert history.previous("item2") == "item2"

    history.new_command("itemA")
    history.new_command("itemB")

    assert history.previous("") == "itemB"
    assert history.previous("itemB") == "itemA"
    assert history.previous("itemA") == "itemA"

    assert history.get_commands() == ["itemA", "itemB"]


def test_copies_only_newest_kept():
    history = _filled(3, ["itemA", "itemB", "itemC", "itemD", "itemE"])
    assert history.get_commands() == ["itemC", "itemD", "itemE"]


def test_get_commands_excludes_loaded():
    history = History(10)
    history.load_commands(["old1", "old2"])
    history.new_command("new1")
    assert history.get_commands() == ["new1"]


def test_show_writes_newest_first():
    history = _filled(10, ["a", "b", "c"])
    out = io.StringIO()
    history.show(out)
    assert out.getvalue() == "\nc\nb\na\n\n"


def test_show_empty():
    out = io.StringIO()
    History(5).show(out)
    assert out.getvalue() == "\n\n"