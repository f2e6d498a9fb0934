"""
FastAPI routers grouped by domain (auth, users, news, vacancies, images).

Each module exposes an APIRouter included by app.create_app under /api.
Routers translate request bodies into service calls and service failures into
ApiError; they hold no business rules.
"""
