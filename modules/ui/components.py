"""
Streamlit renderers for the Creator Desk views.
Renderers only read component state; actions go through the callbacks
the page passes in.
"""

from typing import Any, Callable, Dict, Optional

import pandas as pd
import streamlit as st

from modules.core.models import Product, VideoFile
from modules.core.state_manager import ComponentState, EventLog, ERROR, LOADING
from modules.services.catalog_service import CatalogView
from modules.services.credits_service import CONSUMPTION_ORDER, CreditsSummary
from modules.services.payment_service import PaymentInitiator
from modules.services.subscription_service import SubscriptionManager
from modules.services.upload_service import FILE_MODE, URL_MODE, UploadFeed, UploadSubmission
from modules.ui.indicators import CreditIndicator, SubscriptionIndicator, UploadIndicator
from modules.utils.helpers import format_date, format_price


def render_component_state(state: ComponentState):
    """Show a component's own error and informational message."""
    if state.status == ERROR and state.error:
        st.error(state.error)
    if state.message:
        st.info(state.message)


def render_event_log(events: EventLog, limit: int = 5):
    """Recent errors from every component of the view, newest first."""
    errors = events.errors()
    if not errors:
        return
    with st.expander(f"Recent problems ({len(errors)})"):
        for event in reversed(errors[-limit:]):
            st.caption(f"{event.created_at:%H:%M:%S} · {event.source}: {event.message}")


def render_credits(credits: CreditsSummary):
    st.subheader("Your balance")
    render_component_state(credits.state)
    status = credits.status
    if status is None:
        return
    col1, col2, col3 = st.columns(3)
    col1.metric("One-time credits", status.credits)
    col2.metric("Monthly quota", status.monthly_quota)
    col3.metric("Free generation", CreditIndicator.get_free_generation(status.free_generation_used)['label'])
    next_source = credits.next_source()
    if next_source:
        st.caption(f"Your next generation uses: {next_source}")


def render_consumption_order():
    st.subheader("How credits work")
    for source, role in CONSUMPTION_ORDER:
        col1, col2 = st.columns([3, 1])
        col1.write(source)
        col2.write(f"**{role}**")
    st.caption("If you need more removals, return to the dashboard and add a pack or subscription.")


def _render_pack(product: Product, featured: bool, on_buy: Callable[[str], None]):
    with st.container(border=True):
        if featured:
            st.markdown('<span class="featured-pack">Top pick</span>', unsafe_allow_html=True)
        st.markdown(f"**{product.name}**")
        st.caption(product.description or "One-time credit pack")
        st.write(format_price(product.price, product.currency))
        st.button(
            "Buy",
            key=f"buy_{product.slug}",
            type="primary" if featured else "secondary",
            on_click=on_buy,
            args=(product.slug,)
        )


def render_one_time_packs(catalog: CatalogView, on_buy: Callable[[str], None], per_row: int = 3):
    st.subheader("One-time packs")
    st.caption("Top up when you run out of monthly quota.")
    if catalog.state.status == LOADING:
        st.write("Loading packs...")
        return
    render_component_state(catalog.state)
    packs = catalog.one_time
    if not packs:
        st.write("No packs available.")
        return
    for start in range(0, len(packs), per_row):
        columns = st.columns(per_row)
        for column, product in zip(columns, packs[start:start + per_row]):
            with column:
                _render_pack(product, catalog.is_featured(product), on_buy)


def render_subscription_plans(catalog: CatalogView, on_buy: Callable[[str], None]):
    st.subheader("Subscriptions")
    st.caption("Monthly quota that refreshes automatically.")
    if catalog.state.status == LOADING:
        st.write("Loading plans...")
        return
    plans = catalog.subscription_plans
    if not plans:
        st.write("No subscriptions available.")
        return
    for product in plans:
        col1, col2 = st.columns([3, 1])
        with col1:
            st.markdown(f"**{product.name}**")
            st.caption(product.description or "Monthly subscription")
        with col2:
            st.button(
                f"Subscribe {format_price(product.price, product.currency)}",
                key=f"subscribe_{product.slug}",
                on_click=on_buy,
                args=(product.slug,)
            )


def render_active_subscriptions(manager: SubscriptionManager, on_cancel: Callable[[int], None]):
    st.subheader("Active subscriptions")
    st.caption("Monitor status and cancel when needed.")
    if manager.state.status == LOADING:
        st.write("Loading subscriptions...")
        return
    render_component_state(manager.state)
    if not manager.subscriptions:
        st.write("No subscriptions on this account.")
        return
    for subscription in manager.subscriptions:
        action = SubscriptionIndicator.get_action(subscription)
        col1, col2 = st.columns([3, 1])
        with col1:
            st.markdown(f"**Subscription #{subscription.id}**")
            st.caption(f"Status: {subscription.status}")
            st.caption(f"Period end: {format_date(subscription.current_period_end)}")
        with col2:
            st.button(
                action['label'],
                key=f"cancel_{subscription.id}",
                disabled=action['disabled'],
                on_click=on_cancel,
                args=(subscription.id,)
            )


def render_payment_status(payments: PaymentInitiator, pending_url: Optional[str] = None):
    render_component_state(payments.state)
    if pending_url:
        st.link_button("Open payment page", pending_url)


UPLOAD_MODES = {"Upload file": FILE_MODE, "Paste URL": URL_MODE}


def render_upload_form(submission: UploadSubmission) -> Optional[Dict[str, Any]]:
    """Render the source toggle and form. Returns ``submit`` keyword arguments, or None."""
    st.subheader("Generate a clean file")
    st.caption("Upload your Sora video or paste its link and we handle the rest.")
    labels = list(UPLOAD_MODES)
    choice = st.radio(
        "Source",
        labels,
        index=list(UPLOAD_MODES.values()).index(submission.mode),
        horizontal=True,
        key="upload_mode"
    )
    mode = UPLOAD_MODES.get(choice, submission.mode)
    with st.form("upload_form"):
        if mode == FILE_MODE:
            uploaded = st.file_uploader("Video file (MP4)", type=["mp4"])
            url = None
        else:
            uploaded = None
            url = st.text_input(
                "Video URL (MP4)",
                value=submission.url,
                placeholder="https://example.com/video.mp4"
            )
        submitted = st.form_submit_button(
            "Uploading..." if submission.state.loading else "Start processing",
            disabled=submission.state.loading
        )
    render_component_state(submission.state)
    if not submitted:
        return None
    if mode == FILE_MODE:
        return {'mode': mode, 'file': VideoFile.from_upload(uploaded) if uploaded is not None else None}
    return {'mode': mode, 'url': url}


def uploads_frame(feed: UploadFeed) -> pd.DataFrame:
    columns = ['File', 'Status', 'Result', 'Download', 'Created']
    rows = []
    for item in feed.items:
        result = UploadIndicator.get_result(item)
        rows.append({
            'File': item.original_filename,
            'Status': item.status,
            'Result': result['label'],
            'Download': result['url'],
            'Created': item.created_at
        })
    return pd.DataFrame(rows, columns=columns)


def render_upload_feed(feed: UploadFeed, on_refresh: Callable[[], None],
                       on_load_more: Callable[[], None]):
    col1, col2 = st.columns([3, 1])
    with col1:
        st.subheader("Recent uploads")
        st.caption("Track all generated videos and download results.")
    with col2:
        st.button(
            "Refreshing..." if feed.state.loading else "Refresh",
            key="refresh_uploads",
            disabled=feed.state.loading,
            on_click=on_refresh
        )
    render_component_state(feed.state)

    if not feed.items:
        st.write("No uploads yet.")
    else:
        st.dataframe(
            uploads_frame(feed),
            hide_index=True,
            column_config={'Download': st.column_config.LinkColumn('Download', display_text='Download')}
        )

    if feed.has_more:
        st.button(
            "Loading..." if feed.in_flight else "Load more",
            key="load_more_uploads",
            disabled=feed.in_flight,
            on_click=on_load_more
        )


def render_dashboard(view, on_buy: Callable[[str], None], on_cancel: Callable[[int], None],
                     pending_payment_url: Optional[str] = None):
    """Full dashboard; subscription sections are omitted when the feature is off."""
    render_credits(view.credits)
    render_payment_status(view.payments, pending_payment_url)
    render_one_time_packs(view.catalog, on_buy)
    if view.subscriptions_enabled:
        render_subscription_plans(view.catalog, on_buy)
        render_active_subscriptions(view.subscriptions, on_cancel)
    render_event_log(view.events)


def render_generate(view, on_submit: Callable[[Dict[str, Any]], None], on_refresh: Callable[[], None],
                    on_load_more: Callable[[], None]):
    col1, col2 = st.columns([6, 4])
    with col1:
        submitted = render_upload_form(view.submission)
        if submitted is not None:
            on_submit(submitted)
    with col2:
        render_consumption_order()
        render_upload_feed(view.feed, on_refresh, on_load_more)
    render_event_log(view.events)
