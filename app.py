"""BetaOthello — Gradio web app entry point."""

import gradio as gr

from betaothello.ui.arena_tab import build_arena_tab
from betaothello.ui.board_component import BOARD_CLICK_JS
from betaothello.ui.play_tab import build_play_tab

with gr.Blocks(title="BetaOthello") as demo:
    gr.Markdown("# BetaOthello")
    gr.Markdown("Othello on an 8x8 board against a minimax engine with alpha-beta pruning.")

    with gr.Tab("Play"):
        build_play_tab()

    with gr.Tab("Arena"):
        build_arena_tab()

    # Bind board click handler JS on page load
    demo.load(fn=None, js=BOARD_CLICK_JS)

if __name__ == "__main__":
    demo.launch(theme=gr.themes.Soft())
