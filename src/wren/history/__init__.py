"""History strategies — where navigation actually gets committed.

- ``InMemoryHistoryApi``: a push/pop stack, for hosts without a browser.
- ``StockHistoryApi``: delegates to a browser window's history.
- ``HistoryInterceptor``: routes every push/replace through
  ``beforeNavigate``/``navigationCancelled`` (full mode).
"""
