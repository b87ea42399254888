# streamlit_rsvp_app.py                                                      # Entrypoint de Streamlit: formulario RSVP público.
# =================================================================================
# 💌 Formulario RSVP — App de Invitados (Streamlit)
# Rol: recoger la respuesta, revalidar el teléfono, enviarla a la API y, si la API
# no está disponible, abrir WhatsApp con el mensaje pre-rellenado.
# =================================================================================

import streamlit as st
from dotenv import load_dotenv

load_dotenv()                                                                # Carga API_BASE_URL / COUPLE_WHATSAPP / WEDDING_DATE.

from utils import rsvp_client                                                # noqa: E402  (lee el entorno al importar)
from utils.countdown import countdown_parts, parse_wedding_date               # noqa: E402
from utils.ui import apply_global_styles, open_in_new_tab, render_countdown   # noqa: E402

st.set_page_config(
    page_title="RSVP • Wedding",
    page_icon="💍",
    layout="centered",
    initial_sidebar_state="collapsed",
)
apply_global_styles()

# --- Estado de sesión ----------------------------------------------------------
st.session_state.setdefault("form_version", 0)                               # Cambiarlo vacía el formulario (claves nuevas).
st.session_state.setdefault("last_outcome", None)
st.session_state.setdefault("fallback_opened", False)

# --- Cabecera + cuenta atrás ---------------------------------------------------
st.title("💍 We're getting married")
try:
    render_countdown(countdown_parts(parse_wedding_date()))
except ValueError:
    pass                                                                     # WEDDING_DATE mal formada: se omite la cuenta atrás.

st.subheader("RSVP")
st.caption("Please let us know if you can make it.")

# =================================================================================
# 📝 Formulario
# =================================================================================
v = st.session_state["form_version"]
with st.form(f"rsvp_form_{v}"):
    name = st.text_input("Full name *", key=f"name_{v}")
    phone = st.text_input("WhatsApp number *", placeholder="+27731234567", key=f"phone_{v}")
    attendance = st.selectbox(
        "Will you attend? *",
        options=["yes", "no"],
        index=None,
        placeholder="Choose an option",
        format_func=rsvp_client.attendance_label,
        key=f"attendance_{v}",
    )
    guests = st.number_input("Number of guests *", min_value=1, max_value=10, value=1, step=1, key=f"guests_{v}")
    message = st.text_area("Message for the couple", max_chars=500, key=f"message_{v}")
    submitted = st.form_submit_button("Send RSVP")

if submitted:
    form = rsvp_client.RSVPForm.from_inputs(name, phone, attendance or "", guests, message)
    error = rsvp_client.check_form(form)
    if error:
        st.session_state["last_outcome"] = None
        st.error(error)
    else:
        with st.spinner("Sending..."):                                       # El botón queda bloqueado mientras dura el envío.
            outcome = rsvp_client.submit_rsvp(form)
        st.session_state["last_outcome"] = outcome
        st.session_state["fallback_opened"] = False
        if outcome.ok:
            st.session_state["form_version"] = v + 1                         # Reinicia campos (guests vuelve a 1).
            st.rerun()

# =================================================================================
# 📣 Resultado del último envío
# =================================================================================
outcome = st.session_state.get("last_outcome")
if outcome is not None:
    if outcome.ok:
        st.success(outcome.message)
    else:
        st.error(outcome.message)
        st.link_button("Open WhatsApp", outcome.fallback_url)
        if not st.session_state["fallback_opened"]:
            open_in_new_tab(outcome.fallback_url)
            st.session_state["fallback_opened"] = True
