"""
Thrill Digger Probability Calculator - Interactive Demo

Run with: streamlit run app/demo.py
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import streamlit as st
from typing import Tuple

from thrill_digger import CellContent, SolveStatus, ThrillDiggerSolver

CONTENT_LABELS = {
    CellContent.HIDDEN: "Undug",
    CellContent.GREEN: "Green rupee",
    CellContent.BLUE: "Blue rupee",
    CellContent.RED: "Red rupee",
    CellContent.SILVER: "Silver rupee",
    CellContent.GOLD: "Gold rupee",
    CellContent.RUPOOR: "Rupoor",
    CellContent.BOMB: "Bomb",
}

CONTENT_COLORS = {
    CellContent.GREEN: "#00c800",
    CellContent.BLUE: "#0078d7",
    CellContent.RED: "#dc3232",
    CellContent.SILVER: "#c8c8c8",
    CellContent.GOLD: "#ffd700",
    CellContent.RUPOOR: "#500050",
    CellContent.BOMB: "#323232",
}


def prob_color(prob: float) -> str:
    """Green at 0% bad, yellow at 50%, red at 100%."""
    if prob <= 0.0:
        rgb: Tuple[float, float, float] = (100, 220, 60)
    elif prob >= 1.0:
        rgb = (220, 40, 40)
    elif prob < 0.5:
        t = prob / 0.5
        rgb = (100 + t * 155, 220 - t * 30, 60 - t * 40)
    else:
        t = (prob - 0.5) / 0.5
        rgb = (255 - t * 35, 190 - t * 150, 20 + t * 20)
    r, g, b = (min(255, max(0, int(v))) for v in rgb)
    return f"#{r:02x}{g:02x}{b:02x}"


def render_cell_html(content: CellContent, prob: float) -> str:
    """Render one cell's status box under its selector."""
    if content == CellContent.HIDDEN:
        bg = prob_color(prob)
        text = f"{round(prob * 100)}% Bad"
        text_color = "#000000"
    else:
        bg = CONTENT_COLORS[content]
        text = CONTENT_LABELS[content]
        text_color = "#ffffff" if content in (CellContent.RUPOOR, CellContent.BOMB) else "#000000"

    return f'''<div style="
        background: {bg};
        color: {text_color};
        text-align: center;
        font-weight: bold;
        font-size: 13px;
        padding: 6px 2px;
        border: 1px solid #999;
        border-radius: 4px;
    ">{text}</div>'''


def reset_board(solver: ThrillDiggerSolver) -> None:
    solver.reset()
    for row in range(solver.rows):
        for col in range(solver.cols):
            st.session_state[f"cell_{row}_{col}"] = CellContent.HIDDEN


def main():
    st.set_page_config(
        page_title="Thrill Digger Calculator",
        page_icon="💎",
        layout="wide",
    )

    st.title("Thrill Digger Calculator")
    st.markdown("""
    Set each spot you have dug; every undug spot shows its exact chance of hiding a bomb or rupoor.
    """)

    if "solver" not in st.session_state:
        st.session_state.solver = ThrillDiggerSolver()
        reset_board(st.session_state.solver)

    solver: ThrillDiggerSolver = st.session_state.solver

    if st.sidebar.button("Reset", type="primary"):
        reset_board(solver)
        st.rerun()

    # Selectors first so the solve sees this run's choices.
    grid = [st.columns(solver.cols) for _ in range(solver.rows)]
    for row in range(solver.rows):
        for col in range(solver.cols):
            with grid[row][col]:
                content = st.selectbox(
                    f"({row}, {col})",
                    list(CONTENT_LABELS),
                    format_func=lambda c: CONTENT_LABELS[c],
                    key=f"cell_{row}_{col}",
                    label_visibility="collapsed",
                )
            solver.set_cell(row, col, content)

    result = solver.solve()

    for row in range(solver.rows):
        for col in range(solver.cols):
            with grid[row][col]:
                st.markdown(
                    render_cell_html(solver.content(row, col), solver.probability(row, col)),
                    unsafe_allow_html=True,
                )

    st.markdown("---")
    known_bad = solver.known_bad_count()
    st.text(
        f"Revealed: {solver.revealed_count()} / {solver.rows * solver.cols}    |    "
        f"Bad spots found: {known_bad} / {solver.total_bad}    |    "
        f"Remaining bad: {solver.total_bad - known_bad}"
    )

    if result.status is SolveStatus.CONTRADICTION:
        st.error("No layout matches this board. Check the rupees you entered.")
    elif result.status is SolveStatus.APPROXIMATE:
        st.warning(
            f"{len(result.overflow_cells)} spots were too entangled to enumerate; "
            "their chances are estimates."
        )


if __name__ == "__main__":
    main()
