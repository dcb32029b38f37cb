import contextlib

from prompt_toolkit import PromptSession
from prompt_toolkit.input import create_pipe_input
from prompt_toolkit.output import DummyOutput

from finance_copilot.errors import ElaborationError
from finance_copilot.term_ui import chat_loop, is_exit


@contextlib.contextmanager
def pipe_session():
    with create_pipe_input() as pipe:
        sess = PromptSession(input=pipe, output=DummyOutput())
        yield pipe, sess


def test_is_exit_words():
    assert is_exit(" Quit ")
    assert is_exit("no")
    assert not is_exit("how much rent?")


def test_answers_until_exit_word():
    printed: list[str] = []
    with pipe_session() as (pipe, sess):
        pipe.send_text("how much?\r\rexit\r")
        count = chat_loop(lambda q: f"answer to {q}", session=sess, echo=printed.append)

    assert count == 1
    assert printed == ["\nCopilot: answer to how much?\n", "Bye."]


def test_failed_answer_is_reported_and_loop_continues():
    printed: list[str] = []

    def answer(q: str) -> str:
        if q == "bad":
            raise ElaborationError("service down")
        return "fine"

    with pipe_session() as (pipe, sess):
        pipe.send_text("bad\rgood\rq\r")
        count = chat_loop(answer, session=sess, echo=printed.append)

    assert count == 1
    assert printed == ["Error: service down", "\nCopilot: fine\n", "Bye."]


def test_end_of_input_leaves_the_loop():
    printed: list[str] = []
    with pipe_session() as (pipe, sess):
        pipe.send_text("\x04")  # Ctrl-D on an empty line
        count = chat_loop(lambda q: "x", session=sess, echo=printed.append)

    assert count == 0
    assert printed == ["Bye."]
