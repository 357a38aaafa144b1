"""dib-query: run buffers and inspect statements."""
