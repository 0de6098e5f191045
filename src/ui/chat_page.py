"""NiceGUI chat interface on top of ChatClient."""

import os

from nicegui import Client, app, ui

from src.chat.client import ChatClient
from src.chat.notifications import NotificationKind
from src.models.schemas import Author, Evaluation, Message
from src.session.config import get_client_config
from src.session.storage import THEME_KEY, MappingStorage

NOTIFY_TYPES = {
    NotificationKind.SUCCESS: "positive",
    NotificationKind.INFO: "info",
    NotificationKind.WARNING: "warning",
    NotificationKind.ERROR: "negative",
}

CUSTOM_CSS = """
<style>
    .message-user { border-radius: 18px 18px 4px 18px; }
    .message-bot { border-radius: 18px 18px 18px 4px; }
    .example-card { min-width: 150px; max-width: 200px; cursor: pointer; }
</style>
"""

STORAGE_SECRET = os.getenv("NICEGUI_STORAGE_SECRET", "chat-client-secret")


def bind_to_page(page: Client, chat: ChatClient) -> None:
    """Close the chat's HTTP client once the page client is deleted.

    Reconnects reuse the page client, so a disconnect alone keeps it open.
    """
    page.on_delete(chat.aclose)


def ui_notifier(message: str, kind: NotificationKind, duration: float) -> None:
    ui.notify(message, type=NOTIFY_TYPES[kind], timeout=int(duration * 1000))


@ui.page("/")
async def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    storage = MappingStorage(app.storage.user)
    client = ChatClient(
        config=get_client_config(),
        storage=storage,
        notifier=ui_notifier,
    )
    bind_to_page(ui.context.client, client)

    dark = ui.dark_mode(storage.get(THEME_KEY) == "dark")
    example_questions: list[str] = []

    input_field: ui.input
    send_btn: ui.button

    def toggle_theme() -> None:
        dark.toggle()
        storage.set(THEME_KEY, "dark" if dark.value else "light")

    async def evaluate(message: Message, verdict: Evaluation) -> None:
        await client.evaluate(message.id, verdict)

    def render_evaluation(message: Message) -> None:
        if client.is_responding:
            return
        with ui.row().classes("gap-1"):
            if client.can_evaluate(message.id):
                ui.button(
                    icon="thumb_up",
                    on_click=lambda m=message: evaluate(m, Evaluation.POSITIVE),
                ).props("flat round dense color=positive")
                ui.button(
                    icon="thumb_down",
                    on_click=lambda m=message: evaluate(m, Evaluation.NEGATIVE),
                ).props("flat round dense color=negative")
            elif message.evaluation is Evaluation.POSITIVE:
                ui.icon("thumb_up").classes("text-green-500")
            elif message.evaluation is Evaluation.NEGATIVE:
                ui.icon("thumb_down").classes("text-red-500")

    def render_message(message: Message) -> None:
        is_user = message.author is Author.USER
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user bg-blue-200" if is_user else "message-bot bg-gray-100"

        with ui.row().classes(f"w-full {align}"):
            with ui.column().classes("max-w-[80%] gap-1"):
                with ui.element("div").classes(f"px-4 py-3 text-sm text-black {bubble}"):
                    ui.markdown(message.text)
                if not is_user:
                    render_evaluation(message)

    @ui.refreshable
    def messages_view() -> None:
        if client.error_message:
            ui.label(client.error_message).classes(
                "w-full p-3 border-l-4 border-red-500 bg-red-100 text-red-800 rounded"
            )
        if client.show_example_cards and example_questions:
            with ui.row().classes("w-full justify-center gap-4 mb-8"):
                for question in example_questions:
                    with (
                        ui.card()
                        .classes("example-card p-4 items-center")
                        .props("flat bordered")
                        .on("click", lambda q=question: send(q))
                    ):
                        ui.label(question).classes("text-center truncate")
        for message in client.conversation:
            render_message(message)

    def refresh() -> None:
        messages_view.refresh()
        if client.is_responding:
            input_field.disable()
            send_btn.disable()
        else:
            input_field.enable()
            send_btn.enable()

    client.conversation.add_listener(refresh)

    async def send(text: str) -> None:
        if not client.accepts(text):
            return
        input_field.value = ""
        await client.send(text)
        refresh()

    def new_chat() -> None:
        if client.new_chat():
            refresh()

    # === UI Layout ===
    with ui.column().classes("w-full max-w-2xl mx-auto p-6 gap-4"):
        with ui.row().classes("w-full items-center justify-between"):
            ui.label("Chat").classes("text-2xl font-semibold")
            with ui.row().classes("gap-2"):
                ui.button(icon="add", on_click=new_chat).props("flat round")
                ui.button(icon="dark_mode", on_click=toggle_theme).props("flat round")

        with ui.column().classes("w-full gap-4"):
            messages_view()

        with ui.row().classes("w-full items-center gap-3"):
            input_field = (
                ui.input(
                    placeholder="Ask a question...",
                    validation={
                        "Too long": lambda v: len(v or "") <= client.config.max_question_length
                    },
                )
                .props(f"outlined rounded maxlength={client.config.max_question_length}")
                .classes("flex-grow")
                .on("keydown.enter", lambda: send(input_field.value or ""))
            )
            send_btn = ui.button(
                icon="send",
                on_click=lambda: send(input_field.value or ""),
            ).props("round unelevated")

    if await client.start():
        example_questions.extend(await client.load_example_questions())
    refresh()


def main() -> None:
    ui.run(
        title="Chat",
        port=int(os.getenv("UI_PORT", "8080")),
        reload=False,
        storage_secret=STORAGE_SECRET,
    )


if __name__ == "__main__":
    main()
