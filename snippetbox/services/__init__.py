# Services package init
"""
Snippetbox: Services Layer
==========================

Service Inventory:
    - SnippetService: insert / get / latest against the snippets table
"""
