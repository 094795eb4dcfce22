# Routes package init
"""
Snippetbox: Routes Package
==========================

Route Inventory:
    - pages.py:     GET  /                  (home page, latest snippets)
                    GET  /snippet?id=N      (show one snippet)
                    GET  /snippet/create    (create form)
                    POST /snippet/create    (create, redirect to new snippet)
    - snippets.py:  GET  /api/snippets      (latest snippets as JSON)
                    GET  /api/snippets/{id} (one snippet as JSON)
                    POST /api/snippets      (create from JSON body)
    - health.py:    GET  /health            (database connectivity)

Routes stay thin: read the request, call SnippetService, render the result.
"""
