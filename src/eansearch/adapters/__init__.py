"""I/O adapters: query encoding, HTTP transport, response decoding, export."""
