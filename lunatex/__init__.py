# lunatex/__init__.py
