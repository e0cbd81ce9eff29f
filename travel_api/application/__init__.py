"""
Application layer package.

One use case class per travel order operation (list, create, show,
assess, cancel), each exposing ``execute()``. Use cases depend on
domain ports only and exchange frozen DTOs with the interface layer.
"""
