from __future__ import annotations
import os, sys
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
from typing import List, Optional
import streamlit as st


def ensure_defaults() -> None:
    if "network_id" not in st.session_state:
        st.session_state.network_id = None
    if "train_names" not in st.session_state:
        st.session_state.train_names = []  # names admitted through this session
    if "action_log" not in st.session_state:
        st.session_state.action_log = []  # list of strings


def get_network_id() -> Optional[int]:
    return st.session_state.get("network_id")


def set_network_id(nid: Optional[int]) -> None:
    st.session_state.network_id = nid
    st.session_state.train_names = []
    st.session_state.action_log.append(f"Using network {nid}")


def remember_train(name: str) -> None:
    if name not in st.session_state.train_names:
        st.session_state.train_names.append(name)


def tracked_trains() -> List[str]:
    return list(st.session_state.get("train_names", []))


def log_action(msg: str) -> None:
    st.session_state.action_log.append(msg)
