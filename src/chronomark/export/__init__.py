"""Exporters that turn benchmark results into report bytes.

Markup tables (Markdown, AsciiDoc, Org mode) include a relative-speed
column; the CSV and JSON exporters carry the raw numbers.
"""
