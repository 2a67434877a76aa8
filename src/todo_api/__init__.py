"""
FastAPI Todo Backend package.

Every operation is a use case (see todo_api.use_cases) dispatched through the
mediator; the FastAPI application is built by todo_api.main.create_app.
"""
