"""Unit tests for the conversation store and session controller."""
import asyncio

import pytest

from conftest import FakeProvider
from pipechat.conversation import SEED_HEADER, Conversation, PendingRequest
from pipechat.llm import ChatMessage, RequestPendingError, Role, TransportError
from pipechat.session import SessionController, ask


class TestConversation:
    """Tests for the Conversation model and its projections."""

    def test_empty_conversation(self):
        conversation = Conversation()

        assert len(conversation) == 0
        assert conversation.render_view() == []
        assert conversation.send_view() == []
        assert conversation.last_reply() is None

    def test_without_seed_views_are_identical(self):
        conversation = Conversation.with_seed_content(None)
        conversation.append(ChatMessage(role=Role.USER, content="hi"))

        assert conversation.seed is None
        assert conversation.send_view() == conversation.render_view()

    def test_seed_is_hidden_from_render_view(self):
        conversation = Conversation.with_seed_content("line1\nline2\n")
        conversation.append(ChatMessage(role=Role.USER, content="hi"))

        assert conversation.render_view() == [ChatMessage(role=Role.USER, content="hi")]
        sent = conversation.send_view()
        assert len(sent) == 2
        assert sent[0].role is Role.USER
        assert sent[0].content == f"{SEED_HEADER}line1\nline2\n"

    def test_seed_not_sent_after_delivery(self):
        conversation = Conversation.with_seed_content("S")
        conversation.mark_seed_delivered()

        assert conversation.seed_delivered is True
        assert conversation.send_view() == conversation.render_view()

    def test_views_are_copies(self):
        conversation = Conversation()
        conversation.render_view().append(ChatMessage(role=Role.USER, content="x"))

        assert len(conversation) == 0

    def test_keeps_duplicates_in_order(self):
        conversation = Conversation()
        for text in ["a", "a", "b"]:
            conversation.append(ChatMessage(role=Role.USER, content=text))

        assert [m.content for m in conversation.render_view()] == ["a", "a", "b"]

    def test_pending_request_is_frozen(self):
        pending = PendingRequest(messages=(ChatMessage(role=Role.USER, content="a"),))

        with pytest.raises(ValueError):
            pending.messages = ()  # type: ignore[misc]


class TestSessionController:
    """Tests for turn sequencing."""

    @pytest.mark.asyncio
    async def test_run_turn_appends_user_and_assistant(self, fake_provider):
        controller = SessionController(fake_provider)

        reply = await controller.run_turn("  hello  ")

        assert reply == ChatMessage(role=Role.ASSISTANT, content="first reply")
        assert controller.conversation.render_view() == [
            ChatMessage(role=Role.USER, content="hello"),
            ChatMessage(role=Role.ASSISTANT, content="first reply"),
        ]
        assert controller.is_pending is False

    @pytest.mark.asyncio
    async def test_blank_input_sends_nothing(self, fake_provider):
        controller = SessionController(fake_provider)

        assert await controller.run_turn("   ") is None
        assert controller.begin_turn("") is None
        assert fake_provider.calls == []
        assert len(controller.conversation) == 0

    @pytest.mark.asyncio
    async def test_each_turn_sends_whole_history(self, fake_provider):
        controller = SessionController(fake_provider)

        await controller.run_turn("one")
        await controller.run_turn("two")

        second_request = fake_provider.calls[1]
        assert [(m.role.value, m.content) for m in second_request] == [
            ("user", "one"),
            ("assistant", "first reply"),
            ("user", "two"),
        ]

    @pytest.mark.asyncio
    async def test_hidden_preamble_on_first_turn_only(self, fake_provider):
        controller = SessionController(fake_provider, Conversation.with_seed_content("S"))

        await controller.run_turn("hi")

        # Visible history shows only the literal exchange
        assert controller.conversation.render_view() == [
            ChatMessage(role=Role.USER, content="hi"),
            ChatMessage(role=Role.ASSISTANT, content="first reply"),
        ]
        # The first request carried the seed before the user's message
        first_request = fake_provider.calls[0]
        assert first_request[0].content == f"{SEED_HEADER}S"
        assert first_request[1] == ChatMessage(role=Role.USER, content="hi")

        await controller.run_turn("more")

        # From turn two on, sent and visible histories match
        second_request = fake_provider.calls[1]
        assert all(SEED_HEADER not in m.content for m in second_request)
        assert second_request == controller.conversation.render_view()[:3]

    @pytest.mark.asyncio
    async def test_second_submission_refused_while_pending(self):
        provider = FakeProvider(replies=["done"])
        provider.gate = asyncio.Event()
        controller = SessionController(provider)

        task = asyncio.create_task(controller.run_turn("first"))
        await asyncio.sleep(0)
        assert controller.is_pending

        with pytest.raises(RequestPendingError):
            controller.begin_turn("second")

        provider.gate.set()
        reply = await task

        assert reply.content == "done"
        assert controller.is_pending is False
        assert [m.content for m in controller.conversation.render_view()] == ["first", "done"]
        assert len(provider.calls) == 1

    def test_pending_snapshot_and_issued_at(self, fake_provider):
        controller = SessionController(fake_provider, Conversation.with_seed_content("S"))

        pending = controller.begin_turn("hi")

        assert pending is controller.pending
        assert [m.content for m in pending.messages] == [f"{SEED_HEADER}S", "hi"]
        assert pending.issued_at is not None

    def test_complete_without_pending_is_an_error(self, fake_provider):
        controller = SessionController(fake_provider)

        with pytest.raises(RuntimeError):
            controller.complete_turn("reply")

    @pytest.mark.asyncio
    async def test_failed_turn_keeps_user_message_and_seed(self):
        provider = FakeProvider(error=TransportError("failed to send request: refused"))
        controller = SessionController(provider, Conversation.with_seed_content("S"))

        with pytest.raises(TransportError):
            await controller.run_turn("hi")

        assert controller.is_pending is False
        assert controller.conversation.render_view() == [ChatMessage(role=Role.USER, content="hi")]

        # Next turn is accepted and still carries the undelivered seed
        provider.error = None
        provider.replies = ["recovered"]
        await controller.run_turn("again")

        assert provider.calls[1][0].content == f"{SEED_HEADER}S"
        assert controller.conversation.seed_delivered is True

    def test_debug_callback_receives_session_events(self, fake_provider):
        logs = []
        controller = SessionController(fake_provider, debug_callback=lambda *args: logs.append(args))

        controller.begin_turn("hi")
        controller.complete_turn("ok")

        assert [component for _, component, _ in logs] == ["Session", "Session"]


class TestAsk:
    """Tests for single-turn mode."""

    @pytest.mark.asyncio
    async def test_prompt_only(self, fake_provider):
        reply = await ask(fake_provider, "summarize")

        assert reply == "first reply"
        assert fake_provider.calls == [[ChatMessage(role=Role.USER, content="summarize")]]

    @pytest.mark.asyncio
    async def test_seed_and_prompt(self, fake_provider):
        await ask(fake_provider, "summarize", seed_content="line1\nline2\n")

        sent = fake_provider.calls[0]
        assert [m.content for m in sent] == [f"{SEED_HEADER}line1\nline2\n", "summarize"]

    @pytest.mark.asyncio
    async def test_errors_propagate(self):
        provider = FakeProvider(error=TransportError("boom"))

        with pytest.raises(TransportError):
            await ask(provider, "x")
