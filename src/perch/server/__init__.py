"""Callers of ``App.run()``: the request pipeline and the WSGI adapter."""
