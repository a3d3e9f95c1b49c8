"""Interactive report viewer: streamlit run php_verifier/ui.py"""

from __future__ import annotations
from collections import Counter
from pathlib import Path

import streamlit as st

from php_verifier.policy import describe
from php_verifier.report import ComplianceReport, Section
from php_verifier.verifier import verify

def _section_label(section: Section) -> str:
    counts = Counter(f.severity for f in section.findings)
    parts = [f"{counts[sev]} {sev}" for sev in ("error", "warning", "info") if counts[sev]]
    return f"{section.title} ({', '.join(parts)})" if parts else f"{section.title} (ok)"

def _render_totals(report: ComplianceReport) -> None:
    st.sidebar.markdown("### Totals")
    st.sidebar.write(f"- Errors: {report.error_count}")
    st.sidebar.write(f"- Warnings: {report.warning_count}")

def _render_section(section: Section) -> None:
    with st.expander(_section_label(section), expanded=bool(section.findings)):
        if not section.findings:
            st.success("No findings.")
        for f in section.findings:
            msg = f"{f.rule}: {f.message}"
            if f.severity == "error":
                st.error(msg)
            elif f.severity == "warning":
                st.warning(msg)
            else:
                st.info(msg)
            if f.details:
                st.code("\n".join(f.details), language="text")

def main() -> None:
    st.set_page_config(page_title="PHP Modernization Verifier", layout="wide", initial_sidebar_state="expanded")
    st.sidebar.title("PHP Modernization Verifier")
    folder = st.sidebar.text_input("Project path (server-side)", value=st.session_state.get("project_path", "."))
    st.session_state["project_path"] = folder
    skip_analyzer = st.sidebar.checkbox("Skip PHPStan run", value=False)
    run_clicked = st.sidebar.button("Verify", use_container_width=True)

    st.header("PHP Modernization Verification")
    if run_clicked:
        st.session_state["report"] = verify(Path(folder or "."), skip_analyzer=skip_analyzer)

    report = st.session_state.get("report")
    if report is None:
        st.info("Set the project path in the sidebar, then click **Verify**.")
        return

    _render_totals(report)
    result = describe(report.decision)
    if report.decision == "FAILED":
        st.error(result)
    elif report.decision == "PASSED_WITH_WARNINGS":
        st.warning(result)
    else:
        st.success(result)
    st.caption(f"Directory: {report.target.root}")
    for section in report.sections:
        _render_section(section)

if __name__ == "__main__":
    main()
