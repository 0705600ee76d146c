import gradio as gr

from json_query_toolkit.config import configure_logging
from json_query_toolkit.handlers import (
    PARAM_HEADERS,
    PARSE_MODES,
    decode_query_handler,
    encode_query_handler,
    export_decoded_handler,
    export_parsed_handler,
    load_file_handler,
    parse_text_handler,
)

configure_logging()

# --- UI Definition ---
with gr.Blocks(title="JSON Query Toolkit") as demo:
    gr.Markdown("# JSON Query Toolkit")
    gr.Markdown("Parse JSON or JSON-ish text, and build or inspect URL query strings.")

    # State
    parsed_data_state = gr.State()

    with gr.Tab("Parse"):
        with gr.Row():
            # Left Panel: Input
            with gr.Column(scale=1):
                gr.Markdown("### 1. Input")
                text_input = gr.Code(label="Text", language="json", lines=12)
                file_input = gr.File(label="...or upload a JSON file", file_types=[".json"])
                parse_mode = gr.Radio(
                    choices=PARSE_MODES,
                    value="Auto",
                    label="Parse Mode",
                    info="Permissive accepts unquoted keys, single quotes, trailing commas and comments.",
                )
                parse_btn = gr.Button("Parse", variant="primary")
                parse_status = gr.Textbox(label="Status", interactive=False)

            # Right Panel: Result & Export
            with gr.Column(scale=1):
                gr.Markdown("### 2. Result")
                parsed_preview = gr.JSON(label="Parsed Value")

                gr.Markdown("### 3. Export")
                json_filename = gr.Textbox(label="Output Filename (optional)", placeholder="output")
                export_json_btn = gr.Button("Export JSON", interactive=False)
                json_download = gr.File(label="Download Result")

        parse_btn.click(
            fn=parse_text_handler,
            inputs=[text_input, parse_mode],
            outputs=[parsed_data_state, parsed_preview, parse_status, export_json_btn],
        )

        file_input.upload(
            fn=load_file_handler,
            inputs=[file_input],
            outputs=[parsed_data_state, parsed_preview, parse_status, export_json_btn],
        )

        export_json_btn.click(
            fn=export_parsed_handler,
            inputs=[parsed_data_state, json_filename],
            outputs=[json_download, parse_status],
        )

    with gr.Tab("Query String"):
        with gr.Row():
            with gr.Column(scale=1):
                gr.Markdown("### 1. Encode")
                encode_url = gr.Textbox(label="URL", placeholder="https://example.com/page")
                params_table = gr.Dataframe(
                    headers=PARAM_HEADERS,
                    datatype=["str", "str"],
                    col_count=(2, "fixed"),
                    interactive=True,
                    label="Parameters",
                )
                encode_btn = gr.Button("Encode", variant="primary")
                encoded_url = gr.Textbox(label="Updated URL", interactive=False)
                encode_status = gr.Textbox(label="Status", interactive=False)

            with gr.Column(scale=1):
                gr.Markdown("### 2. Decode")
                decode_url = gr.Textbox(label="URL or query text")
                unquote_values = gr.Checkbox(label="Percent-decode keys and values", value=False)
                decode_btn = gr.Button("Decode", variant="primary")
                decoded_table = gr.Dataframe(
                    headers=PARAM_HEADERS,
                    datatype=["str", "str"],
                    col_count=(2, "fixed"),
                    interactive=False,
                    label="Decoded Parameters",
                )
                decode_status = gr.Textbox(label="Status", interactive=False)
                table_filename = gr.Textbox(label="Excel Filename (optional)", placeholder="export")
                export_table_btn = gr.Button("Export to Excel")
                table_download = gr.File(label="Download Table")

        encode_btn.click(
            fn=encode_query_handler,
            inputs=[encode_url, params_table],
            outputs=[encoded_url, encode_status],
        )

        decode_btn.click(
            fn=decode_query_handler,
            inputs=[decode_url, unquote_values],
            outputs=[decoded_table, decode_status],
        )

        export_table_btn.click(
            fn=export_decoded_handler,
            inputs=[decoded_table, table_filename],
            outputs=[table_download, decode_status],
        )

if __name__ == "__main__":
    demo.launch()
