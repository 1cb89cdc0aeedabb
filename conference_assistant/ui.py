# Run from project root: streamlit run conference_assistant/ui.py
# UI talks to backend API (POST /chat, POST /audio-in-text-out-chat, POST /audio-chat). Chat memory is stored on server by conversationId.

import os
import sys
import uuid
from pathlib import Path

# Ensure project root is on path (Streamlit may run with cwd != project root)
_root_from_file = Path(__file__).resolve().parent.parent
_cwd = os.getcwd()
for _root in (_root_from_file, _cwd):
    _root = str(_root)
    if _root not in sys.path:
        sys.path.insert(0, _root)

import streamlit as st
import requests

from conference_assistant.core.config import API_BASE


def _error_text(r: requests.Response) -> str:
    return f"Error: {r.status_code} - {r.text[:200]}"


def _post_audio(path: str, recording) -> requests.Response:
    recording.seek(0)
    return requests.post(
        f"{API_BASE}{path}",
        files={"audio": (recording.name or "question.wav", recording.read(), recording.type or "audio/wav")},
        data={"conversationId": st.session_state.conversation_id},
        timeout=120,
    )


st.title("JFall Conference Assistant")

# One conversation id per conversation; server keeps memory and preferred sessions by it
if "conversation_id" not in st.session_state:
    st.session_state.conversation_id = str(uuid.uuid4())
if "messages" not in st.session_state:
    st.session_state.messages = []
if st.button("New conversation", key="new_conversation"):
    st.session_state.conversation_id = str(uuid.uuid4())
    st.session_state.messages = []
    st.session_state.pop("last_recording", None)
    st.session_state.pop("speech", None)
    st.rerun()

text_tab, audio_tab = st.tabs(["Text chat", "Audio chat"])

with text_tab:
    for msg in st.session_state.messages:
        with st.chat_message(msg["role"]):
            st.markdown(msg["content"])

    # If we just submitted a message, show "Thinking..." while waiting for the reply
    if st.session_state.get("pending_message"):
        prompt = st.session_state.pending_message
        with st.chat_message("assistant"):
            placeholder = st.empty()
            placeholder.caption("Thinking...")
            try:
                r = requests.post(
                    f"{API_BASE}/chat",
                    json={"message": prompt, "conversationId": st.session_state.conversation_id},
                    timeout=120,
                )
                answer = r.text if r.ok else _error_text(r)
            except requests.RequestException as e:
                answer = f"Connection failed: {e}"
            placeholder.markdown(answer or "No answer.")
        st.session_state.messages.append({"role": "assistant", "content": answer or "No answer."})
        del st.session_state["pending_message"]
        st.rerun()

    recording = st.audio_input("Ask your question by voice", key="text_tab_recording")
    if recording is not None and st.session_state.get("last_recording") != recording.file_id:
        st.session_state.last_recording = recording.file_id
        with st.spinner("Transcribing and thinking..."):
            try:
                r = _post_audio("/audio-in-text-out-chat", recording)
                if r.ok:
                    data = r.json()
                    st.session_state.messages.append({"role": "user", "content": data.get("transcribedInputText", "")})
                    st.session_state.messages.append({"role": "assistant", "content": data.get("outputText", "")})
                    st.rerun()
                else:
                    st.error(_error_text(r))
            except requests.RequestException as e:
                st.error(f"Backend not reachable: {e}")

    if prompt := st.chat_input("Ask about sessions, speakers, rooms or the venue"):
        st.session_state.messages.append({"role": "user", "content": prompt})
        st.session_state.pending_message = prompt
        st.rerun()

with audio_tab:
    st.caption("Record a question; the assistant answers with speech.")
    voice_question = st.audio_input("Record your question", key="audio_tab_recording")
    if voice_question is not None and st.button("Send", key="send_audio"):
        with st.spinner("Thinking..."):
            try:
                r = _post_audio("/audio-chat", voice_question)
                if r.ok:
                    st.session_state.speech = r.content
                else:
                    st.error(_error_text(r))
            except requests.RequestException as e:
                st.error(f"Backend not reachable: {e}")
    if st.session_state.get("speech"):
        st.audio(st.session_state.speech, format="audio/mp3", autoplay=True)
