import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging
from datetime import date

import streamlit as st
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from tracker.config import CURRENCY, DATA_PATH, configure_logging
from tracker.aggregate import category_totals
from tracker.domain import Category
from tracker.events import (
    EXPENSE_ADDED,
    EXPENSE_UPDATED,
    EXPENSE_DELETED,
    AddExpense,
    DeleteExpense,
    EditExpense,
    ExpenseTracker,
)
from tracker.filters import ALL, available_months, filtered_expenses
from tracker.functional import find_expense, parse_expense_input
from tracker.services import compute_statistics, trend_series
from tracker.storage import JsonExpenseStore

configure_logging()
logger = logging.getLogger("app")

CATEGORY_COLORS = {
    Category.FOOD: "#10b981",
    Category.TRANSPORT: "#6366f1",
    Category.SHOPPING: "#8b5cf6",
    Category.BILLS: "#f59e0b",
    Category.ENTERTAINMENT: "#ec4899",
    Category.HEALTHCARE: "#ef4444",
    Category.EDUCATION: "#3b82f6",
    Category.OTHER: "#6b7280",
}

st.set_page_config(page_title="Expense Tracker", layout="wide")


def money(value: float) -> str:
    return f"{CURRENCY}{value:,.2f}"


def month_label(key: str, fmt: str = "%B %Y") -> str:
    return pd.Timestamp(f"{key}-01").strftime(fmt)


def notify(event, payload: dict) -> dict:
    st.session_state.notice = payload["message"]
    return {"notified": True}


if "tracker" not in st.session_state:
    tracker = ExpenseTracker(JsonExpenseStore(DATA_PATH))
    for name in (EXPENSE_ADDED, EXPENSE_UPDATED, EXPENSE_DELETED):
        tracker.bus.subscribe(name, notify)
    st.session_state.tracker = tracker
    logger.info(f"Tracker started with {len(tracker.expenses)} expenses from {DATA_PATH}")

tracker: ExpenseTracker = st.session_state.tracker
category_names = [c.value for c in Category]

if st.session_state.get("notice"):
    st.toast(st.session_state.pop("notice"), icon="✅")

st.title("💸 Expense Tracker")

# --- Add expense
st.sidebar.markdown("### ➕ Add Expense")
with st.sidebar.form("expense_form", clear_on_submit=True):
    amount = st.number_input(f"Amount ({CURRENCY})", min_value=0.0, step=1.0, format="%.2f")
    category = st.selectbox("Category", category_names)
    when = st.date_input("Date", value=date.today())
    description = st.text_input("Description (optional)")
    submitted = st.form_submit_button("Add Expense")

if submitted:
    result = parse_expense_input(amount, category, when, description)
    if result.is_right():
        tracker.dispatch(AddExpense(result.get_or_else(None)))
        st.rerun()
    else:
        st.sidebar.error(result.get_error()["message"])

# --- Statistics
stats = compute_statistics(tracker.expenses)
k1, k2, k3 = st.columns(3)
with k1:
    st.metric("Total Expenses", money(stats.total))
with k2:
    st.metric("This Month", money(stats.this_month))
with k3:
    st.metric("Predicted Next Month", money(stats.prediction))

# --- Charts (full history, filters do not apply)
chart_left, chart_right = st.columns(2)
with chart_left:
    st.subheader("By Category")
    totals = category_totals(tracker.expenses)
    if totals:
        df_cat = pd.DataFrame(
            [{"Category": c.value, "Total": v} for c, v in totals.items()]
        )
        fig_cat = px.pie(
            df_cat,
            values="Total",
            names="Category",
            hole=0.55,
            color="Category",
            color_discrete_map={c.value: color for c, color in CATEGORY_COLORS.items()},
            template="plotly_dark",
        )
        fig_cat.update_traces(hovertemplate="%{label}: " + CURRENCY + "%{value:,.2f} (%{percent})")
        fig_cat.update_layout(legend=dict(orientation="h"), margin=dict(t=10, b=10, l=10, r=10))
        st.plotly_chart(fig_cat, use_container_width=True)
    else:
        st.info("No expenses yet.")

with chart_right:
    st.subheader("Monthly Trend")
    series = trend_series(tracker.expenses)
    if series.months:
        labels = [month_label(m, "%b %Y") for m in series.months]
        fig_ts = go.Figure()
        fig_ts.add_trace(go.Scatter(
            x=labels,
            y=list(series.amounts),
            mode="lines+markers",
            fill="tozeroy",
            line=dict(color="#6366f1", width=3, shape="spline"),
            name="Monthly Expenses",
        ))
        if series.predicted:
            fig_ts.add_trace(go.Scatter(
                x=labels[-1:],
                y=list(series.amounts[-1:]),
                mode="markers",
                marker=dict(color="#8b5cf6", size=12),
                name="Predicted",
            ))
        fig_ts.update_layout(
            template="plotly_dark",
            showlegend=False,
            yaxis=dict(rangemode="tozero", tickprefix=CURRENCY),
            margin=dict(t=10, b=10, l=10, r=10),
        )
        st.plotly_chart(fig_ts, use_container_width=True)
    else:
        st.info("No expenses yet.")

st.divider()

# --- Expense list (filtered)
st.subheader("🧾 Expenses")
f1, f2 = st.columns(2)
with f1:
    category_filter = st.selectbox("Category", [ALL] + category_names, key="filter_category")
with f2:
    month_options = [ALL] + available_months(tracker.expenses)
    month_filter = st.selectbox(
        "Month",
        month_options,
        format_func=lambda m: "All months" if m == ALL else month_label(m),
        key="filter_month",
    )

visible = filtered_expenses(tracker.expenses, category_filter, month_filter)
if not visible:
    st.info("📝 No expenses found. Add your first expense in the sidebar!")
else:
    df = pd.DataFrame([
        {
            "Date": e.date.strftime("%B %d, %Y"),
            "Category": e.category.value,
            "Amount": money(e.amount),
            "Description": e.description,
        }
        for e in visible
    ])
    st.dataframe(df, use_container_width=True, hide_index=True)

    # --- Edit / delete
    options = {e.id: f"{e.date:%Y-%m-%d} · {e.category.value} · {money(e.amount)}" for e in visible}
    selected_id = st.selectbox(
        "Select an expense to edit or delete",
        list(options.keys()),
        format_func=lambda i: options[i],
        key="selected_expense",
    )
    selected = find_expense(tracker.expenses, selected_id)

    if selected.is_some():
        current = selected.get_or_else(None)
        edit_col, delete_col = st.columns([3, 1])
        with edit_col:
            with st.form("edit_form"):
                new_amount = st.number_input(
                    f"Amount ({CURRENCY})", min_value=0.0, step=1.0, format="%.2f",
                    value=float(current.amount),
                )
                new_category = st.selectbox(
                    "Category", category_names,
                    index=category_names.index(current.category.value),
                )
                new_date = st.date_input("Date", value=current.date)
                new_description = st.text_input("Description", value=current.description)
                save = st.form_submit_button("✏️ Save Changes")

            if save:
                result = parse_expense_input(
                    new_amount, new_category, new_date, new_description, expense_id=current.id
                )
                if result.is_right():
                    tracker.dispatch(EditExpense(current.id, result.get_or_else(None)))
                    st.rerun()
                else:
                    st.error(result.get_error()["message"])

        with delete_col:
            confirm = st.checkbox("Are you sure?", key=f"confirm_{current.id}")
            if st.button("🗑️ Delete", disabled=not confirm, key=f"delete_{current.id}"):
                tracker.dispatch(DeleteExpense(current.id))
                st.rerun()

    csv = df.to_csv(index=False)
    st.download_button("⬇ Download CSV", csv, file_name="expenses.csv", mime="text/csv")
