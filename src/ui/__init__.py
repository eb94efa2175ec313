"""NiceGUI interface - thin visualization layer over the conversion API.

Responsibilities:
    - PDF upload
    - Strategy and AI structuring selection
    - Block preview and publish trigger

Contains no business logic. Delegates all operations to the API.
"""
