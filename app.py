"""
Product Showcase
Streamlit page listing handmade products with a contact form that
composes an email through a mailto link.
"""
import json
import logging

import streamlit as st
import streamlit.components.v1 as components

from modules.catalog import (
    copyright_notice,
    load_catalog,
    derive_dropdown_options,
    format_price,
    CatalogConfigError,
    PLACEHOLDER_LABEL,
)
from modules.contact import submit_contact_form
from modules.domain import FormSubmission
from modules.settings import get_settings

logging.basicConfig(level=logging.INFO)

# Page configuration
st.set_page_config(
    page_title="Product Showcase",
    page_icon="🎨",
    layout="wide",
)

settings = get_settings()

try:
    catalog = load_catalog(settings.CATALOG_PATH)
except (FileNotFoundError, CatalogConfigError) as e:
    st.error(f"⚠️ Could not load the product catalog: {str(e)}")
    st.stop()

recipient = settings.CONTACT_EMAIL or catalog.contact_email

# Header
st.title(catalog.title)
st.markdown(f"Welcome! Everything here was made by hand by **{catalog.owner}**.")

st.divider()

# Product cards
st.header("Products")
columns = st.columns(3)
for index, product in enumerate(catalog.products):
    with columns[index % 3]:
        with st.container(border=True):
            st.subheader(product.name)
            st.write(product.description)
            st.markdown(f"**{format_price(product.price)}**")
            if product.available:
                st.success(product.status_label)
            else:
                st.error(product.status_label)

st.divider()

# Contact form
st.header("Place an Order")

options = [option for option in derive_dropdown_options(catalog) if not option.is_placeholder]
labels = {option.value: option.label for option in options}

with st.form("contactForm"):
    name = st.text_input("Your Name *", key="name")
    email = st.text_input("Your Email *", key="email")
    product = st.selectbox(
        "Product *",
        options=list(labels.keys()),
        format_func=lambda value: labels[value],
        index=None,
        placeholder=PLACEHOLDER_LABEL,
        key="product",
    )
    message = st.text_area(
        "Message",
        key="message",
        max_chars=settings.MESSAGE_MAX_LENGTH,
    )
    submitted = st.form_submit_button("Send Message")

if submitted:
    submission = FormSubmission(
        name=name,
        email=email,
        selected_product=product or "",
        message=message,
    )

    def open_mail_client(uri: str) -> None:
        # The component iframe is sandboxed without top-level navigation, so
        # the script can only try window.open(), which popup blockers may stop.
        # The link button is the path that always works.
        components.html(
            f"<script>window.open({json.dumps(uri)}, '_blank');</script>",
            height=0,
        )
        st.link_button("📧 Open in your email app", url=uri)

    outcome = submit_contact_form(
        submission,
        recipient,
        open_mail_client=open_mail_client,
        notify=st.success,
        settings=settings,
    )

    for error in outcome.errors:
        st.error(f"⚠️ {error.field.capitalize()}: {error.message}")

# Footer
st.divider()
st.caption(copyright_notice(catalog))
