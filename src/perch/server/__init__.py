"""ASGI request pipeline, response sending and the pounce dev server."""
