"""Trip planning board: Airtable records, selections and currency totals."""

__version__ = "0.1.0"
