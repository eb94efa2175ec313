"""NiceGUI page for converting PDFs into Notion pages."""

import os

import httpx
from nicegui import events, ui

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")

BLOCK_STYLES = {
    "heading": "text-lg font-semibold text-gray-900",
    "bullet_item": "text-sm text-gray-700 pl-4",
    "numbered_item": "text-sm text-gray-700 pl-4",
    "paragraph": "text-sm text-gray-700",
}

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }
    body { background: #f5f5f5; min-height: 100vh; }
    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
    }
    .header { background: linear-gradient(135deg, #2563eb 0%, #1e40af 100%); }
</style>
"""


class ConversionState:
    """Holds the uploaded file and the last conversion for one page visit."""

    def __init__(self) -> None:
        self.filename: str | None = None
        self.content: bytes | None = None
        self.blocks: list[dict] = []
        self.busy: bool = False


async def request_conversion(
    state: ConversionState,
    title: str,
    strategy: str,
    use_ai: bool,
    publish: bool,
) -> dict:
    """Send the uploaded PDF to the /convert endpoint."""
    async with httpx.AsyncClient(timeout=180.0) as client:
        response = await client.post(
            f"{API_BASE_URL}/convert",
            files={"file": (state.filename, state.content, "application/pdf")},
            data={
                "title": title,
                "strategy": strategy,
                "use_ai": str(use_ai).lower(),
                "publish": str(publish).lower(),
            },
        )
        if response.is_error:
            detail = response.json().get("detail", response.text)
            raise RuntimeError(f"HTTP {response.status_code}: {detail}")
        return response.json()


@ui.page("/")
def convert_page() -> None:
    """Main conversion page."""
    ui.add_head_html(CUSTOM_CSS)
    state = ConversionState()

    preview_container: ui.column

    def render_blocks() -> None:
        preview_container.clear()
        with preview_container:
            if not state.blocks:
                with ui.column().classes("w-full h-48 items-center justify-center gap-2"):
                    ui.icon("description").classes("text-5xl text-gray-300")
                    ui.label("Upload a PDF to preview its blocks").classes("text-gray-400")
                return
            for block in state.blocks:
                style = BLOCK_STYLES.get(block["type"], BLOCK_STYLES["paragraph"])
                prefix = "• " if block["type"] == "bullet_item" else ""
                ui.label(f"{prefix}{block['text']}").classes(style)

    async def handle_upload(e: events.UploadEventArguments) -> None:
        state.filename = e.file.name
        state.content = await e.file.read()
        if not title_input.value:
            title_input.value = state.filename.rsplit(".", 1)[0]
        ui.notify(f"Loaded {state.filename}")

    async def run(publish: bool) -> None:
        if state.busy:
            return
        if state.content is None:
            ui.notify("Upload a PDF first", type="warning")
            return
        state.busy = True
        spinner.set_visibility(True)
        try:
            result = await request_conversion(
                state,
                title=title_input.value,
                strategy=strategy_select.value,
                use_ai=ai_switch.value,
                publish=publish,
            )
        except (httpx.RequestError, RuntimeError) as e:
            ui.notify(str(e), type="negative")
            return
        finally:
            state.busy = False
            spinner.set_visibility(False)

        state.blocks = result["blocks"]
        render_blocks()
        sent = len(result["payload"]["children"])
        if publish:
            ui.notify(f"Published '{result['title']}' ({sent} blocks)", type="positive")
        elif result["payload"]["dropped"]:
            ui.notify(f"Only the first {sent} blocks will be published", type="warning")

    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-3xl mx-auto app-container gap-0"),
    ):
        with ui.row().classes("w-full header px-5 py-4 items-center gap-3 rounded-t-xl"):
            ui.icon("picture_as_pdf").classes("text-white text-3xl")
            ui.label("PDF to Notion").classes("text-lg font-semibold text-white")

        with ui.column().classes("w-full p-5 gap-3"):
            ui.upload(on_upload=handle_upload, auto_upload=True, max_files=1).props(
                "accept=.pdf"
            ).classes("w-full")
            title_input = ui.input("Page title").classes("w-full")
            with ui.row().classes("w-full items-center gap-4"):
                strategy_select = ui.select(
                    {"paragraph": "Paragraphs", "geometric": "Page layout"},
                    value="paragraph",
                    label="Reflow",
                ).classes("w-48")
                ai_switch = ui.switch("Structure with AI").bind_enabled_from(
                    strategy_select, "value", lambda v: v == "paragraph"
                )
                spinner = ui.spinner(size="lg")
                spinner.set_visibility(False)
            with ui.row().classes("gap-3"):
                ui.button("Preview", icon="visibility", on_click=lambda: run(False))
                ui.button("Convert to Notion", icon="upload", on_click=lambda: run(True))

        with ui.scroll_area().classes("w-full h-[28rem] bg-gray-50 rounded-b-xl"):
            preview_container = ui.column().classes("w-full p-5 gap-2")
            render_blocks()


def main() -> None:
    ui.run(title="PDF to Notion", port=8080, reload=False)


if __name__ == "__main__":
    main()
