import logging
import random
import time

import streamlit as st
import matplotlib.pyplot as plt
import numpy as np

from kmap_quiz.grader import reveal
from kmap_quiz.kmap_engine import (
    COL_VARS,
    GRAY_LABELS,
    MAP_COLS,
    MAP_ROWS,
    ROW_VARS,
    grid_cells,
    grid_index_to_truth_index,
    map_grid,
)
from kmap_quiz.logic import format_truth_table, normalize_input
from kmap_quiz.questions import generate_all
from kmap_quiz.session import (
    Phase,
    Retry,
    Start,
    current_question,
    elapsed,
    new_session,
    submit,
    transition,
)

logging.basicConfig(level=logging.INFO)

KEYBOARD_KEYS = ["A", "B", "C", "D", "+", "¬"]

# ------------------------------- page setup -------------------------------

st.set_page_config(page_title="K-Map Drill", layout="wide")
st.title("🧮 K-Map Drill")
st.markdown("---")

if "game" not in st.session_state:
    st.session_state.game = new_session()
    st.session_state.feedback = None


# ------------------------------- rendering helpers -------------------------------
def show_truth_table(table):
    st.markdown("### Truth table")
    st.table([dict(zip("ABCDF", row)) for row in format_truth_table(table)])


def draw_kmap(table, title="Karnaugh map"):
    """Draw the canonical map with Gray-code headers and minterm numbers."""
    st.markdown(f"### {title}")
    grid = map_grid(table)
    fig, ax = plt.subplots(figsize=(4.2, 4.2))
    ax.set_xlim(-0.6, MAP_COLS)
    ax.set_ylim(-0.6, MAP_ROWS)
    ax.set_xticks(np.arange(0, MAP_COLS + 1))
    ax.set_yticks(np.arange(0, MAP_ROWS + 1))
    ax.set_xticklabels([])
    ax.set_yticklabels([])
    ax.grid(True, color="#888", linewidth=1)
    ax.invert_yaxis()
    ax.set_facecolor("#fafafa")

    ax.text(-0.3, -0.3, f"{ROW_VARS}\\{COL_VARS}", ha="center", va="center", fontsize=9)
    for j, lab in enumerate(GRAY_LABELS):
        ax.text(j + 0.5, -0.25, lab, ha="center", va="center", fontsize=10, color="#333")
    for i, lab in enumerate(GRAY_LABELS):
        ax.text(-0.25, i + 0.5, lab, ha="right", va="center", fontsize=10, color="#333")

    for r, c in grid_cells():
        value = int(grid[r, c])
        ax.text(c + 0.5, r + 0.5, str(value), color="#1f3c88" if value else "#9aa7b7",
                fontsize=13, ha="center", va="center", weight="bold")
        ax.text(c + 0.05, r + 0.9, str(grid_index_to_truth_index(r, c)),
                color="#777", fontsize=8, alpha=0.7)
    st.pyplot(fig)
    plt.close(fig)


def map_input(round_key):
    """Blank editable grid; returns {(row, col): checked}."""
    st.markdown(f"### Karnaugh map ({ROW_VARS} rows \\ {COL_VARS} columns)")
    header = st.columns(MAP_COLS + 1)
    header[0].markdown(f"**{ROW_VARS}\\{COL_VARS}**")
    for j, lab in enumerate(GRAY_LABELS):
        header[j + 1].markdown(f"**{lab}**")
    cells = {}
    for r, lab in enumerate(GRAY_LABELS):
        cols = st.columns(MAP_COLS + 1)
        cols[0].markdown(f"**{lab}**")
        for c in range(MAP_COLS):
            cells[(r, c)] = cols[c + 1].checkbox(
                " ", key=f"cell-{round_key}-{r}-{c}", label_visibility="collapsed"
            )
    return cells


def press_key(widget_key, key):
    current = st.session_state.get(widget_key, "")
    st.session_state[widget_key] = current[:-1] if key == "⌫" else current + key


def expression_input(round_key):
    widget_key = f"expr-{round_key}"
    st.text_input("Expression", key=widget_key, placeholder="e.g. A¬B+¬CD")
    cols = st.columns(len(KEYBOARD_KEYS) + 1)
    for col, key in zip(cols, KEYBOARD_KEYS + ["⌫"]):
        col.button(key, key=f"key-{round_key}-{key}", on_click=press_key, args=(widget_key, key))
    return st.session_state.get(widget_key, "")


# ------------------------------- screens -------------------------------
game = st.session_state.game

if game.phase is Phase.NOT_STARTED:
    st.markdown(
        "Seven questions: four truth table → K-map, two K-map → expression and one "
        "truth table → K-map → expression. Five mistakes in a row end the game."
    )
    if st.button("Start 🚀"):
        st.session_state.game = transition(game, Start(generate_all(random.Random()), time.monotonic()))
        st.session_state.feedback = None
        st.rerun()

elif game.phase is Phase.IN_PROGRESS:
    question = current_question(game)
    st.caption(
        f"Q{game.index + 1} / {len(game.questions)} · "
        f"{elapsed(game, time.monotonic()):.2f} s · mistakes: {game.mistakes}"
    )
    if st.session_state.feedback:
        ok, lines = st.session_state.feedback
        (st.success if ok else st.error)("\n\n".join(lines))

    problem, answer = st.columns(2)
    with problem:
        if question.needs_map:
            show_truth_table(question.truth_table)
        else:
            draw_kmap(question.truth_table)
    with answer:
        # widget keys are unique per game and question
        round_key = f"{game.started_at}-{game.index}"
        cells = map_input(round_key) if question.needs_map else None
        raw_expr = expression_input(round_key) if question.needs_expression else None

    if st.button("Submit"):
        graded = False
        try:
            expression = normalize_input(raw_expr) if raw_expr is not None else None
            st.session_state.game, result = submit(
                game, time.monotonic(), grid=cells, expression=expression
            )
            st.session_state.feedback = (result.correct, result.feedback)
            graded = True
        except Exception as e:
            st.error(f"Could not grade the answer:\n{e}")
        if graded:
            st.rerun()

else:
    if game.success:
        st.success(f"Cleared! Time: {elapsed(game, time.monotonic()):.2f} s")
    else:
        st.error("Failed...")
        failed = current_question(game)
        solution = reveal(failed)
        draw_kmap(failed.truth_table, title="Correct answer")
        if solution.expression:
            st.markdown(f"Expression (example): `{solution.expression}`")
            st.markdown(f"Minimal form: `{solution.minimal_expression}`")
    if st.button("Retry"):
        st.session_state.game = transition(game, Retry())
        st.session_state.feedback = None
        st.rerun()
