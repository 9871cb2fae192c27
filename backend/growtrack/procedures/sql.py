"""JSON aggregate constructs rendered per database dialect.

PostgreSQL gets ``json_agg``/``jsonb_build_object``; SQLite (local runs and
tests) gets ``json_group_array``/``json_object``. Both return ``NULL`` or an
empty array for zero rows, so callers still coalesce to ``[]``.
"""
from sqlalchemy import JSON, literal_column
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.functions import FunctionElement


class json_build_object(FunctionElement):
    type = JSON()
    name = "json_build_object"
    inherit_cache = True


class json_array_agg(FunctionElement):
    type = JSON()
    name = "json_array_agg"
    inherit_cache = True


@compiles(json_build_object)
def _json_object_default(element, compiler, **kw):
    return "json_object(%s)" % compiler.process(element.clauses, **kw)


@compiles(json_build_object, "postgresql")
def _json_object_pg(element, compiler, **kw):
    return "jsonb_build_object(%s)" % compiler.process(element.clauses, **kw)


@compiles(json_array_agg)
def _json_array_default(element, compiler, **kw):
    return "json_group_array(%s)" % compiler.process(element.clauses, **kw)


@compiles(json_array_agg, "postgresql")
def _json_array_pg(element, compiler, **kw):
    return "json_agg(%s)" % compiler.process(element.clauses, **kw)


def json_summary(**columns):
    """``json_build_object('key', column, ...)`` from keyword arguments."""
    args = []
    for key, column in columns.items():
        args.append(literal_column(f"'{key}'"))
        args.append(column)
    return json_build_object(*args)
