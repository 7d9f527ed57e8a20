import threading

from fractinator.core.commands import Command, CommandChannel


def test_drain_returns_commands_in_order_and_empties():
    ch = CommandChannel()
    ch.post(Command("a"))
    ch.post(Command("b", (1, 2)))
    assert [c.name for c in ch.drain()] == ["a", "b"]
    assert ch.drain() == []
    assert len(ch) == 0


def test_posts_from_many_threads_all_arrive():
    ch = CommandChannel()

    def writer(n):
        for i in range(200):
            ch.post(Command("w", (n, i)))

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    got = ch.drain()
    assert len(got) == 800
    for n in range(4):
        assert [c.args[1] for c in got if c.args[0] == n] == list(range(200))


def test_engine_base_is_abstract():
    import pytest

    from fractinator.core.engine import EngineBase

    with pytest.raises(TypeError):
        EngineBase()
