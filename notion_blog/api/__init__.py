"""
HTTP surface for the blog.

Example:
    uvicorn notion_blog.api.main:app
"""
