import pytest

from protoc_synth.models import Field, MapType, NamedType, RepeatedType
from protoc_synth.parser.type_parser import (
    TypeExpressionError,
    parse_field,
    parse_fields,
    parse_type_expression,
)


class TestParseTypeExpression:
    def test_scalar(self):
        assert parse_type_expression("int64") == NamedType("int64")

    def test_dotted_name(self):
        assert parse_type_expression("a.b.Foo") == NamedType("a.b.Foo")

    def test_fully_qualified_name(self):
        assert parse_type_expression(".a.b.Foo") == NamedType(".a.b.Foo")

    def test_repeated(self):
        assert parse_type_expression("repeated a.b.Foo") == RepeatedType(NamedType("a.b.Foo"))

    def test_map(self):
        result = parse_type_expression("map<a.b.K, c.d.V>")
        assert result == MapType(NamedType("a.b.K"), NamedType("c.d.V"))

    def test_map_without_spaces(self):
        result = parse_type_expression("map<string,int32>")
        assert result == MapType(NamedType("string"), NamedType("int32"))

    def test_empty_is_unresolved(self):
        assert parse_type_expression("") is None
        assert parse_type_expression("   ") is None
        assert parse_type_expression(None) is None

    @pytest.mark.parametrize("text", ["map<a.b.K>", "repeated", "a b", "a..b", "list<int>"])
    def test_malformed(self, text):
        with pytest.raises(TypeExpressionError):
            parse_type_expression(text)

    def test_error_names_field(self):
        with pytest.raises(TypeExpressionError, match="Field 'items'"):
            parse_field("items", "repeated")


class TestRendering:
    def test_str_matches_type_syntax(self):
        assert str(parse_type_expression("repeated a.b.Foo")) == "repeated a.b.Foo"
        assert str(parse_type_expression("map<a.b.K,c.d.V>")) == "map<a.b.K, c.d.V>"
        assert str(parse_type_expression(" string ")) == "string"


class TestQualifiers:
    def test_scalar_has_none(self):
        assert list(NamedType("int64").qualifiers()) == []

    def test_dotted(self):
        assert list(NamedType("a.b.Foo").qualifiers()) == ["a.b"]

    def test_repeated(self):
        assert list(RepeatedType(NamedType("a.b.Foo")).qualifiers()) == ["a.b"]

    def test_map_collects_key_and_value(self):
        map_type = MapType(NamedType("a.b.K"), NamedType("c.d.V"))
        assert list(map_type.qualifiers()) == ["a.b", "c.d"]

    def test_map_with_scalar_key(self):
        map_type = MapType(NamedType("string"), NamedType("c.d.V"))
        assert list(map_type.qualifiers()) == ["c.d"]


class TestParseFields:
    def test_keeps_order_and_unresolved(self):
        fields = parse_fields([("id", "int64"), ("tags", "repeated string"), ("later", "")])

        assert fields == (
            Field("id", NamedType("int64")),
            Field("tags", RepeatedType(NamedType("string"))),
            Field("later", None),
        )
        assert fields[2].is_resolved is False
