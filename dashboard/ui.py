import streamlit as st

from airtraffic.config import AIRPORTS_CSV, CARRIERS_CSV, FLIGHTS_CSV
from airtraffic.errors import AirTrafficError
from airtraffic.load import load_store
from airtraffic import queries
from airtraffic.visualize import (
    build_cancellation_figure, build_running_average_figure, build_taxi_figure
)

# --- Page Configuration ---
st.set_page_config(
    page_title="Air Traffic Statistics",
    page_icon="✈️",
    layout="wide",
    initial_sidebar_state="expanded",
)

# --- Helper Functions ---

@st.cache_resource
def get_store(flights_path, carriers_path, airports_path):
    """Loads the record store once per set of paths."""
    return load_store(flights_path, carriers_path, airports_path)


def show_question(title, func, store):
    """Runs one question and renders its result, or the error it raised."""
    st.subheader(title)
    try:
        result = func(store)
    except AirTrafficError as e:
        st.error(str(e))
        return None
    if hasattr(result, 'columns'):
        st.dataframe(result)
    else:
        st.metric(label=title, value=result)
    return result


# --- Data Loading ---
st.sidebar.title("Data")
flights_path = st.sidebar.text_input("Flights CSV", str(FLIGHTS_CSV))
carriers_path = st.sidebar.text_input("Carriers CSV", str(CARRIERS_CSV))
airports_path = st.sidebar.text_input("Airports CSV", str(AIRPORTS_CSV))

try:
    store = get_store(flights_path, carriers_path, airports_path)
except (FileNotFoundError, AirTrafficError) as e:
    st.error(f"Could not load data: {e}")
    st.stop()

# --- Sidebar Navigation ---
st.sidebar.title("Navigation")
page = st.sidebar.radio("Go to", ["Traffic Overview", "Delays", "Airports"])

# --- Main App ---

if page == "Traffic Overview":
    st.title("✈️ Traffic Overview")
    st.markdown(f"{len(store.flights):,} flight records, {len(store.carriers):,} carriers.")

    col1, col2 = st.columns(2)
    with col1:
        show_question("Flights per Aircraft", queries.flight_count, store)
    with col2:
        show_question("Carriers Flying LAS → JFK", queries.flights_from_vegas_to_jfk, store)

    col1, col2 = st.columns(2)
    with col1:
        show_question("Carriers That Did Not Fly", queries.did_not_fly, store)
    with col2:
        show_question("Cancelled for Security Reasons", queries.cancelled_due_to_security, store)

    show_question("Median Distance (miles)", queries.distance_median, store)

elif page == "Delays":
    st.title("⏱️ Delays")

    col1, col2 = st.columns(2)
    with col1:
        show_question("Longest Weather Delay, Jan–Mar", queries.longest_weather_delay, store)
    with col2:
        show_question("95th Percentile Carrier Delay", queries.score95, store)

    st.subheader("Weather Delay vs. Departure Delay")
    try:
        c, b = queries.least_squares(store)
        st.markdown(f"WeatherDelay ≈ **{c:.4f}** + **{b:.4f}** × DepDelay")
    except AirTrafficError as e:
        st.error(str(e))

    running = show_question("Running Average of Departure Delay", queries.running_average, store)
    if running is not None:
        st.plotly_chart(build_running_average_figure(running), use_container_width=True)

elif page == "Airports":
    st.title("🛫 Airports")

    taxi = show_question("Average Taxi Time", queries.time_spent_taxiing, store)
    if taxi is not None:
        st.plotly_chart(build_taxi_figure(taxi), use_container_width=True)

    cancelled = show_question("Cancellation Rate", queries.cancelled_flights, store)
    if cancelled is not None:
        st.plotly_chart(build_cancellation_figure(cancelled), use_container_width=True)
