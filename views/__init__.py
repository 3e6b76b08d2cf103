"""Display payload builders and structured response envelopes for the web API."""
