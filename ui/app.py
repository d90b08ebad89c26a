import os, sys
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
import requests
import streamlit as st

from ui.api_client import ApiClient
from ui.components.track_schematic import render_track_schematic
from ui.state_manager import (
    ensure_defaults,
    get_network_id,
    set_network_id,
    remember_train,
    tracked_trains,
    log_action,
)

st.set_page_config(page_title="Corridor Interlocking", layout="wide")
st.title("Corridor Interlocking – Live Board")

ensure_defaults()
client = ApiClient()


def _error_text(e: requests.HTTPError) -> str:
    try:
        body = e.response.json()
        return f"{body.get('error')}: {body.get('detail')}"
    except ValueError:
        return str(e)


if st.button("New network (default corridor)", type="primary"):
    set_network_id(client.create_network()["id"])

nid = get_network_id()
if nid is None:
    st.info("Create a network to start.")
    st.stop()

with st.form("admit"):
    c1, c2, c3 = st.columns(3)
    name = c1.text_input("Train name", value="t1")
    entry = c2.number_input("Entry section", min_value=1, value=1, step=1)
    destination = c3.number_input("Destination section", min_value=1, value=8, step=1)
    if st.form_submit_button("Admit train"):
        try:
            client.add_train(nid, name, int(entry), int(destination))
            remember_train(name)
            log_action(f"Admitted {name} {int(entry)}->{int(destination)}")
        except requests.HTTPError as e:
            st.error(_error_text(e))

state = client.get_state(nid)
active = [n for n in tracked_trains() if (state.get("trains", {}).get(n) or {}).get("in_service")]

selected = st.multiselect("Trains to move this tick", active, default=active)
if st.button("Tick") and selected:
    try:
        res = client.move_trains(nid, selected)
        log_action(f"Tick: {res['moved']}/{len(selected)} moved")
    except requests.HTTPError as e:
        st.error(_error_text(e))
    state = client.get_state(nid)

st.plotly_chart(render_track_schematic(state, layout=state.get("layout")), use_container_width=True)
st.code(client.render(nid))

with st.expander("Action log"):
    for line in reversed(st.session_state.action_log[-50:]):
        st.write(line)
