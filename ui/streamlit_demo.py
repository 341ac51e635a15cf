from typing import Any, Dict, Optional

import pandas as pd
import requests
import streamlit as st
from dotenv import load_dotenv

load_dotenv()

st.set_page_config(page_title="Prescription Parser Demo", layout="wide")

# ---------------------------
# Config
# ---------------------------
DEFAULT_API_BASE = "http://127.0.0.1:8000"
API_BASE = st.sidebar.text_input("API Base URL", value=DEFAULT_API_BASE)

st.sidebar.subheader("AI parsing")
use_ai = st.sidebar.toggle("Use AI first", value=False)
api_key = st.sidebar.text_input("API key", type="password")

FIELD_TYPES = ["quantity", "doseForm", "dosePattern", "duration"]

# ---------------------------
# Helpers (API)
# ---------------------------
def api_post(path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    r = requests.post(f"{API_BASE}{path}", json=payload, timeout=20)
    if r.status_code >= 400:
        raise RuntimeError(f"{r.status_code} {r.text}")
    return r.json()

def api_get(path: str, params: Optional[Dict[str, Any]] = None) -> Any:
    r = requests.get(f"{API_BASE}{path}", params=params or {}, timeout=20)
    if r.status_code >= 400:
        raise RuntimeError(f"{r.status_code} {r.text}")
    return r.json()

def api_delete(path: str) -> Dict[str, Any]:
    r = requests.delete(f"{API_BASE}{path}", timeout=20)
    if r.status_code >= 400:
        raise RuntimeError(f"{r.status_code} {r.text}")
    return r.json()

# ---------------------------
# Session state
# ---------------------------
if "last_parse" not in st.session_state:
    st.session_state.last_parse = None

# ---------------------------
# UI
# ---------------------------
st.title("Prescription Parser: one-line entry demo")

col_left, col_right = st.columns([1.2, 1])

with col_left:
    st.subheader("1) Parse a prescription line")
    line = st.text_input("Prescription", value="Ars alb 1M 1/2oz liquid 6-6-6 4 weeks")

    if st.button("Parse"):
        try:
            st.session_state.last_parse = api_post("/parse-prescription", {
                "input": line,
                "use_ai": use_ai,
                "api_key": api_key or None,
            })
        except Exception as e:
            st.error(f"Parse failed: {e}")

    res = st.session_state.last_parse
    if res:
        if res.get("success"):
            data = res["data"]
            st.success(f"Parsed via `{res.get('method')}` (confidence {data.get('confidence')})")
            st.table(pd.DataFrame([{k: v for k, v in data.items() if k != "prescription_text"}]).T.rename(columns={0: "value"}))
            if data.get("prescription_text"):
                st.code(data["prescription_text"])

            if "+" in (data.get("medicine_name") or ""):
                if st.button("Save as combination"):
                    out = api_post("/combinations/register", {"medicine_name": data["medicine_name"]})
                    st.json(out)
        else:
            st.warning(res.get("error") or "Could not parse this line.")

    st.subheader("2) Medicine autocomplete")
    q = st.text_input("Search medicines / combinations", value="")
    if q.strip():
        try:
            found = api_get("/medicines/autocomplete", {"q": q})
            st.dataframe(pd.DataFrame(found.get("medicines", []) + found.get("combinations", [])), use_container_width=True)
        except Exception as e:
            st.error(str(e))
    if st.button("Seed common medicines"):
        st.json(api_post("/medicines/seed", {}))

with col_right:
    st.subheader("Smart parsing rules")

    try:
        rules = api_get("/smart-parsing")
    except Exception as e:
        rules = []
        st.error(f"Could not load rules: {e}")

    if rules:
        df = pd.DataFrame(rules)[["id", "name", "field_type", "pattern", "replacement", "is_regex", "priority", "is_active"]]
        st.dataframe(df, use_container_width=True, hide_index=True)

        rule_id = st.selectbox("Rule", options=[r["id"] for r in rules],
                               format_func=lambda rid: next(r["name"] for r in rules if r["id"] == rid))
        c1, c2 = st.columns(2)
        with c1:
            if st.button("Toggle active"):
                current = next(r for r in rules if r["id"] == rule_id)
                r = requests.put(f"{API_BASE}/smart-parsing/{rule_id}", json={"is_active": not current["is_active"]}, timeout=20)
                if r.ok:
                    st.rerun()
                st.error(r.text)
        with c2:
            if st.button("Delete"):
                api_delete(f"/smart-parsing/{rule_id}")
                st.rerun()
    else:
        st.caption("No rules yet.")

    st.divider()
    with st.form("new_rule"):
        st.write("**New rule**")
        name = st.text_input("Name", value="OD to pattern")
        field_type = st.selectbox("Field", FIELD_TYPES, index=2)
        pattern = st.text_input("Pattern", value=r"\bOD\b")
        replacement = st.text_input("Replacement ($1, $2 for groups)", value="1-0-0")
        is_regex = st.checkbox("Regex", value=True)
        priority = st.number_input("Priority", value=10, step=1)
        if st.form_submit_button("Create"):
            api_post("/smart-parsing", {
                "name": name,
                "field_type": field_type,
                "pattern": pattern,
                "replacement": replacement,
                "is_regex": is_regex,
                "priority": int(priority),
            })
            st.rerun()

    st.divider()
    st.write("**Apply rules to the line above**")
    if st.button("Apply rules"):
        st.json(api_post("/smart-parsing/apply", {"text": line}))
