"""Protocol Compliance Test Suite.

Compliance tests for the JSON:API document grammar:

- Envelope, resource object and error object member allow-lists
- Data, error and meta-only documents
"""
