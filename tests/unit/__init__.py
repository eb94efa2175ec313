"""Unit tests for individual components in isolation.

Coverage:
    - reflow/: Paragraph and geometric reflow, furniture, salvage
    - parsing/: Text and fragment extraction
    - publishing/: Payload mapping and the Notion client
    - agent/: Agent configuration and error mapping
    - conversion/: The extract, structure, reflow, publish chain

Uses mocks for the model and Notion. Leverages pytest-check for multiple
assertions per test.
"""
