import json

from core.chat_fallback import ERROR_REPLY
from core.conversation_memory import ConversationMemory
from core.orchestrator import EMPTY_MESSAGE_REPLY, Orchestrator
from core.turn_logger import TurnLogger
from stores import JsonTaskStore


class StubFallback:
    """Fallback stub that records what the chat model would have received."""

    def __init__(self, reply="From the assistant: fallback response."):
        self.reply = reply
        self.calls = []

    def general_answer(self, messages, tasks):
        self.calls.append((list(messages), list(tasks)))
        return self.reply


class BrokenStore:
    def list_tasks(self):
        raise RuntimeError("backend unavailable")


def _build(tmp_path, fallback=None, **kwargs):
    store = JsonTaskStore(tmp_path / "tasks.json")
    fallback = fallback or StubFallback()
    return Orchestrator(store, fallback, **kwargs), store, fallback


def test_create_command_updates_store_without_fallback(tmp_path):
    orchestrator, store, fallback = _build(tmp_path)

    turn = orchestrator.handle_message_with_details("Create task: 🏃 Morning jog, 30m, urgent")

    assert turn.intent == "create"
    assert turn.handled is True
    assert turn.store_action == "create"
    assert turn.success is True
    assert turn.fallback_triggered is False
    assert turn.text.startswith('✅ Created task "🏃 Morning jog"')
    assert fallback.calls == []
    [task] = store.list_tasks()
    assert (task.title, task.priority, task.time_estimate) == ("🏃 Morning jog", "high", 30)


def test_commands_see_previous_mutations(tmp_path):
    orchestrator, store, _ = _build(tmp_path)

    orchestrator.handle_message("Create task: Write report")
    reply = orchestrator.handle_message("Move write report to in progress")

    assert reply == '✅ Moved "Write report" to In Progress.'
    assert store.list_tasks()[0].status == "in_progress"


def test_chat_goes_to_fallback_with_history_and_board(tmp_path):
    orchestrator, store, fallback = _build(tmp_path)
    store.create_task("Write report", priority="high")

    orchestrator.handle_message("help")
    turn = orchestrator.handle_message_with_details("What should I do first?")

    assert turn.intent == "chat"
    assert turn.fallback_triggered is True
    assert turn.handled is False
    assert turn.text == "From the assistant: fallback response."
    [(messages, tasks)] = fallback.calls
    assert messages[-1] == {"role": "user", "content": "What should I do first?"}
    assert messages[0] == {"role": "user", "content": "help"}
    assert [task.title for task in tasks] == ["Write report"]


def test_empty_memory_passed_in_is_the_one_used(tmp_path):
    memory = ConversationMemory(max_turns=4)
    orchestrator, _, _ = _build(tmp_path, memory=memory)

    assert orchestrator.memory is memory
    orchestrator.handle_message("hello there")
    assert len(memory) == 2


def test_create_with_out_of_range_due_date_keeps_the_task(tmp_path):
    orchestrator, store, fallback = _build(tmp_path)

    turn = orchestrator.handle_message_with_details("Create task: Plan, in 3000000 days")

    assert turn.intent == "create"
    assert turn.text == '✅ Created task "Plan".'
    assert [(task.title, task.due_date) for task in store.list_tasks()] == [("Plan", None)]
    assert fallback.calls == []


def test_memory_records_both_sides(tmp_path):
    memory = ConversationMemory(max_turns=4)
    orchestrator, _, _ = _build(tmp_path, memory=memory)

    orchestrator.handle_message("list my tasks")
    orchestrator.handle_message("hello there")
    orchestrator.handle_message("help")

    history = memory.history()
    assert len(history) == 4
    assert history[0] == {"role": "user", "content": "hello there"}
    assert history[-2] == {"role": "user", "content": "help"}
    assert history[-1]["role"] == "assistant"


def test_empty_message_has_no_side_effects(tmp_path):
    orchestrator, store, fallback = _build(tmp_path)

    turn = orchestrator.handle_message_with_details("   ")

    assert turn.text == EMPTY_MESSAGE_REPLY
    assert turn.intent == "empty"
    assert len(orchestrator.memory) == 0
    assert fallback.calls == []
    assert not store.storage_path.exists()


def test_unreadable_store_returns_error_reply():
    fallback = StubFallback()
    orchestrator = Orchestrator(BrokenStore(), fallback)

    turn = orchestrator.handle_message_with_details("Delete task Anything")

    assert turn.text == ERROR_REPLY
    assert turn.success is False
    assert fallback.calls == []


def test_turns_are_logged_as_jsonl(tmp_path):
    log_path = tmp_path / "logs" / "turns.jsonl"
    orchestrator, _, _ = _build(tmp_path, turn_logger=TurnLogger(turn_log_path=log_path))

    orchestrator.handle_message("Create task: Buy milk")
    orchestrator.handle_message("Tell me a joke")

    records = [json.loads(line) for line in log_path.read_text(encoding="utf-8").splitlines()]
    assert [record["intent"] for record in records] == ["create", "chat"]
    assert records[0]["store_action"] == "create"
    assert records[0]["store_success"] is True
    assert records[0]["command"]["title"] == "Buy milk"
    assert records[1]["fallback_triggered"] is True
    assert records[1]["response_text"] == "From the assistant: fallback response."


def test_turn_to_dict_uses_reply_key(tmp_path):
    orchestrator, _, _ = _build(tmp_path)
    payload = orchestrator.handle_message_with_details("Create task: Buy milk").to_dict()
    assert payload["reply"].startswith("✅ Created task")
    assert payload["task"]["title"] == "Buy milk"
    assert payload["command"] == {
        "intent": "create",
        "title": "Buy milk",
        "status": "todo",
        "priority": "medium",
        "due_date": None,
        "time_estimate": None,
    }
