"""Tests for ChatSession."""

from unittest.mock import MagicMock

import pytest

from openjustice.chat import ChatSession
from openjustice.status import StatusRecord
from openjustice.streaming import ResponseAccumulator


def _response(text, *, awaiting=False, execution_id=None):
    return ResponseAccumulator(
        output_text=text,
        complete=True,
        awaiting_input=awaiting,
        execution_id=execution_id,
    )


@pytest.fixture
def client():
    return MagicMock()


class TestSend:
    def test_records_transcript(self, client):
        client.process_message.return_value = _response("Answer.")
        session = ChatSession(client)

        response = session.send("Question?")

        assert response.output_text == "Answer."
        assert [(m.role, m.content) for m in session.messages] == [
            ("user", "Question?"),
            ("assistant", "Answer."),
        ]
        assert session.last_response is response
        assert session.awaiting_input is False

    def test_pause_then_resume(self, client):
        client.process_message.side_effect = [
            _response("Did you give notice?", awaiting=True, execution_id="exec-1"),
            _response("Then the deposit is yours."),
        ]
        session = ChatSession(client)

        session.send("Can they keep my deposit?")
        assert session.awaiting_input is True
        assert session.pending_execution_id == "exec-1"

        session.send("Yes")
        first, second = client.process_message.call_args_list
        assert first.args[3] is None
        assert second.args[3] == "exec-1"
        assert session.pending_execution_id is None

    def test_pause_without_id_is_not_pending(self, client):
        client.process_message.side_effect = [
            _response("Q?", awaiting=True, execution_id="exec-1"),
            _response("Anything else?", awaiting=True, execution_id=None),
            _response("Done."),
        ]
        session = ChatSession(client)
        for text in ("one", "two", "three"):
            session.send(text)
        tokens = [c.args[3] for c in client.process_message.call_args_list]
        assert tokens == [None, "exec-1", None]

    def test_resume_token_used_once(self, client):
        client.process_message.side_effect = [
            _response("Q?", awaiting=True, execution_id="exec-1"),
            _response("A"),
            _response("B"),
        ]
        session = ChatSession(client)
        for text in ("one", "two", "three"):
            session.send(text)
        tokens = [c.args[3] for c in client.process_message.call_args_list]
        assert tokens == [None, "exec-1", None]

    def test_progress_forwarded(self, client):
        status = StatusRecord("SWITCH", "Switch", "Deciding")

        def fake_process(message, image, on_update, resume_token, image_name=None):
            on_update("", status)
            on_update("Partial", None)
            return _response("Partial answer")

        client.process_message.side_effect = fake_process
        seen = []
        session = ChatSession(client)
        session.send("Hi", on_update=lambda content, s: seen.append((content, s)))

        assert seen == [("", status), ("Partial", None)]
        assert session.messages[-1].content == "Partial answer"

    def test_error_recorded_and_raised(self, client):
        client.process_message.side_effect = RuntimeError("boom")
        session = ChatSession(client)
        with pytest.raises(RuntimeError):
            session.send("Hi")
        assert session.messages[-1].content == "Error: boom"

    def test_image_label(self, client, tmp_path):
        client.process_message.return_value = _response("ok")
        image = tmp_path / "lease.png"
        image.write_bytes(b"png")
        session = ChatSession(client)
        session.send("See attached", image=image)
        assert session.messages[0].image_name == "lease.png"
        assert client.process_message.call_args.args[1] == image

    def test_reset(self, client):
        client.process_message.return_value = _response("Q?", awaiting=True, execution_id="e")
        session = ChatSession(client)
        session.send("Hi")
        session.reset()
        assert session.messages == []
        assert session.pending_execution_id is None
        assert session.last_response is None


class TestExportPdf:
    def test_writes_last_answer(self, client, tmp_path):
        client.process_message.return_value = _response("Final answer.")
        client.documents.generate_pdf.return_value = b"%PDF-signed"
        session = ChatSession(client)
        session.send("Q")

        path = session.export_pdf(tmp_path / "answer.pdf", image=b"abc")

        assert path.read_bytes() == b"%PDF-signed"
        client.documents.generate_pdf.assert_called_once_with(
            "Final answer.", image_data="data:image/png;base64,YWJj", file_name="answer.pdf"
        )

    def test_uses_most_recent_assistant_message(self, client, tmp_path):
        client.process_message.side_effect = [_response("Good answer."), RuntimeError("x")]
        client.documents.generate_pdf.return_value = b"%PDF"
        session = ChatSession(client)
        session.send("one")
        with pytest.raises(RuntimeError):
            session.send("two")
        session.export_pdf(tmp_path / "a.pdf")
        assert client.documents.generate_pdf.call_args.args[0] == "Error: x"

    def test_nothing_to_export(self, client, tmp_path):
        with pytest.raises(ValueError, match="No message content available"):
            ChatSession(client).export_pdf(tmp_path / "a.pdf")
        client.documents.generate_pdf.assert_not_called()
