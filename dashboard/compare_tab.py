"""Compare tab: load several scenarios and compare them side by side."""

import uuid

import streamlit as st

from propcalc.calculator import calculate_property_data
from propcalc.config import ConfigError, load_config, parse_config_text
from propcalc.output import comparison_csv
from propcalc.params import PropertyData

from dashboard.compare_charts import COLOURS, comparison_equity_chart, comparison_roi_chart
from dashboard.formatters import details_dataframe
from dashboard.sidebar import CONFIGS_DIR, PRESETS

MAX_SCENARIOS = 12


def _scenarios() -> list[dict]:
    return st.session_state.setdefault("compare_scenarios", [])


def _add(name: str, partial: dict, source: str) -> bool:
    scenarios = _scenarios()
    if len(scenarios) >= MAX_SCENARIOS:
        st.warning(f"Maximum {MAX_SCENARIOS} scenarios reached. Remove one first.")
        return False
    scenarios.append({"id": uuid.uuid4().hex, "name": name, "partial": partial, "source": source})
    return True


@st.cache_data
def _cached_calculate(partial: dict) -> PropertyData:
    return calculate_property_data(partial)


def _unique_names(names: list[str]) -> list[str]:
    seen: dict[str, int] = {}
    result = []
    for name in names:
        count = seen.get(name, 0)
        seen[name] = count + 1
        result.append(name if count == 0 else f"{name} ({count + 1})")
    return result


def _source_controls(current_input: dict) -> None:
    """Buttons that add a scenario from a preset, the sidebar, a file or pasted text."""
    from_preset, from_sidebar, from_file, from_text = st.tabs(
        ["Preset", "Sidebar", "Upload", "Paste"]
    )

    with from_preset:
        choice = st.selectbox(
            "Preset",
            [name for name, filename in PRESETS.items() if filename is not None],
            key="compare_preset",
        )
        if st.button("Add preset", key="compare_add_preset"):
            try:
                partial = load_config(CONFIGS_DIR / PRESETS[choice])
            except ConfigError as exc:
                st.error(str(exc))
            else:
                if _add(choice, partial, f"Preset: {choice}"):
                    st.rerun()

    with from_sidebar:
        st.caption("Freeze the current sidebar inputs as a scenario.")
        if st.button("Add sidebar scenario", key="compare_add_sidebar"):
            if _add("Sidebar", current_input, "Sidebar snapshot"):
                st.rerun()

    with from_file:
        files = st.file_uploader(
            "Scenario files",
            type=["yaml", "yml", "json"],
            accept_multiple_files=True,
            key="compare_upload",
        )
        if files and st.button("Add files", key="compare_add_files"):
            failed = []
            for f in files:
                fmt = "json" if f.name.endswith(".json") else "yaml"
                try:
                    partial = parse_config_text(f.getvalue().decode("utf-8"), fmt)
                except (ConfigError, UnicodeDecodeError) as exc:
                    failed.append(f"{f.name}: {exc}")
                    continue
                if not _add(f.name.rsplit(".", 1)[0], partial, f"File: {f.name}"):
                    break
            if failed:
                st.error("Could not load:\n" + "\n".join(failed))
            else:
                st.rerun()

    with from_text:
        text = st.text_area("YAML or JSON", height=120, key="compare_text")
        if text.strip() and st.button("Add text", key="compare_add_text"):
            # JSON documents are valid YAML
            try:
                partial = parse_config_text(text)
            except ConfigError as exc:
                st.error(str(exc))
            else:
                if _add("Pasted", partial, "Pasted text"):
                    st.rerun()


def _scenario_list() -> None:
    """Editable names with a colour key and a remove button per scenario."""
    scenarios = _scenarios()
    for idx, scenario in enumerate(list(scenarios)):
        swatch, name_col, source_col, remove_col = st.columns([0.4, 3, 2, 1])
        swatch.markdown(
            f"<span style='color:{COLOURS[idx % len(COLOURS)]};font-size:1.6em'>&#9632;</span>",
            unsafe_allow_html=True,
        )
        scenario["name"] = name_col.text_input(
            "Name",
            value=scenario["name"],
            key=f"compare_name_{scenario['id']}",
            label_visibility="collapsed",
        )
        source_col.caption(scenario["source"])
        if remove_col.button("Remove", key=f"compare_remove_{scenario['id']}"):
            scenarios.remove(scenario)
            st.rerun()


def render_compare_tab(current_input: dict) -> None:
    """Render the Compare tab UI."""
    st.subheader("Multi-Scenario Comparison")
    st.caption(
        "Compare purchase costs, cash flow and returns for several scenarios. Scenarios "
        "are kept for this session only."
    )

    _source_controls(current_input)

    scenarios = _scenarios()
    if not scenarios:
        return
    st.markdown("---")
    _scenario_list()

    if len(scenarios) < 2:
        st.info("Add at least 2 scenarios to see comparison charts.")
        return

    names = _unique_names([s["name"] for s in scenarios])
    scenario_data = [(name, _cached_calculate(s["partial"])) for name, s in zip(names, scenarios)]

    st.markdown("---")
    if len({len(data.projections) for _, data in scenario_data}) > 1:
        st.info("Scenarios project over different numbers of years; each line runs to its own horizon.")

    left, right = st.columns(2)
    with left:
        st.plotly_chart(comparison_equity_chart(scenario_data), use_container_width=True)
        st.caption(
            "Equity (solid) against cumulative cash spent (dashed). The gap shows how much "
            "of the cash put in is held as equity."
        )
    with right:
        st.plotly_chart(comparison_roi_chart(scenario_data), use_container_width=True)
        st.caption(
            "Rent, tax refunds and capital growth, less everything spent so far, as a "
            "percentage of that spending."
        )

    st.subheader("Side-by-side Details")
    st.dataframe(details_dataframe(scenario_data), use_container_width=True, hide_index=True, height=600)
    st.download_button(
        "Download Comparison (CSV)",
        comparison_csv(scenario_data),
        "property_comparison.csv",
        "text/csv",
    )
