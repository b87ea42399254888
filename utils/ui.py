# utils/ui.py
# =============================================================================
# Utilidades de UI compartidas (solo presentación visual, sin lógica de negocio)
# - Estilos globales (fondo, tipografías, botones, limpieza del <form>)
# - Tarjeta de cuenta atrás
# - Apertura del enlace de WhatsApp en una pestaña nueva
# =============================================================================

import json

import streamlit as st
import streamlit.components.v1 as components

from utils.countdown import Countdown


# ─────────────────────────────────────────────────────────────────────────────
# 1) Estilos globales (tema visual + limpieza de formularios)
# ─────────────────────────────────────────────────────────────────────────────
def apply_global_styles() -> None:
    """
    Inyecta CSS global coherente:
    - Tipografías y tokens visuales.
    - Botón de envío del formulario en color primario.
    - Oculta header/sidebar nativos para un lienzo limpio.
    """
    st.markdown(
        """
        <style>
          @import url('https://fonts.googleapis.com/css2?family=Inter:wght@300;400;600&family=Playfair+Display:wght@600;700&display=swap');
          :root{
            --text:#111111; --muted:#666666; --primary:#0F0F0F;
            --shadow:0 10px 35px rgba(0,0,0,.08); --radius:12px;
          }
          [data-testid="stHeader"]{ display:none; }
          [data-testid="stSidebar"]{ display:none !important; }
          [data-testid="stSidebarCollapsedControl"]{ display:none !important; }
          html, body, [class*="block-container"]{ font-family:'Inter', sans-serif; }
          h1, h2, h3{ font-family:'Playfair Display', serif !important; font-weight:700; }

          form[data-testid="stForm"] [data-testid="stFormSubmitButton"] button{
            background:var(--primary) !important; color:#FFFFFF !important; border:none !important;
            border-radius:10px !important; width:100% !important; padding:10px 16px !important;
          }

          .countdown{ display:flex; justify-content:center; gap:18px; margin:8px 0 24px 0; }
          .countdown div{ text-align:center; min-width:64px; }
          .countdown b{ display:block; font-size:28px; font-family:'Playfair Display', serif; }
          .countdown span{ color:var(--muted); font-size:12px; text-transform:uppercase; }
        </style>
        """,
        unsafe_allow_html=True,
    )


# ─────────────────────────────────────────────────────────────────────────────
# 2) Cuenta atrás
# ─────────────────────────────────────────────────────────────────────────────
def render_countdown(parts: Countdown) -> None:
    labels = parts.as_labels()
    cells = "".join(
        f"<div><b>{labels[key]}</b><span>{key}</span></div>"
        for key in ("days", "hours", "minutes", "seconds")
    )
    st.markdown(f'<div class="countdown">{cells}</div>', unsafe_allow_html=True)


# ─────────────────────────────────────────────────────────────────────────────
# 3) Enlace de respaldo
# ─────────────────────────────────────────────────────────────────────────────
def open_in_new_tab(url: str) -> None:
    """Intenta abrir la URL en otra pestaña (el navegador puede bloquear el pop-up)."""
    components.html(
        f"<script>window.open({json.dumps(url)}, '_blank', 'noopener');</script>",
        height=0,
    )
