"""Query and mutation helpers shared by API routes and the Streamlit UI."""
