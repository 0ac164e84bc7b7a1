"""Tests for tern.media.codecs and the encode/decode API."""

import csv
import io
from dataclasses import dataclass

from tern._internal.invoke import invoke
from tern.http.response import Response
from tern.media import Handler, Media
from tern.media.codecs import cast, cast_all, decode_form, encode_form

MOVIES = {
    "movies": [
        {"name": "Shaun of the Dead", "year": "2004"},
        {"name": "V for Vendetta", "year": "2005"},
    ]
}

FORM_ENCODED = (
    "movies%5B0%5D%5Bname%5D=Shaun+of+the+Dead&movies%5B0%5D%5Byear%5D=2004"
    "&movies%5B1%5D%5Bname%5D=V+for+Vendetta&movies%5B1%5D%5Byear%5D=2005"
)


@dataclass
class Record:
    id: int
    foo: str


class Document:
    def __init__(self, title: str) -> None:
        self.title = title
        self._secret = "hidden"


class Exportable:
    def to_dict(self) -> dict:
        return {"exported": True}


class TestJson:
    def test_encode_and_decode(self, media: Media) -> None:
        data = {"hello": "world", "foo": ["bar", {"baz": "dib"}]}
        encoded = media.encode("json", data)
        assert encoded == '{"hello": "world", "foo": ["bar", {"baz": "dib"}]}'
        assert media.to("json", data) == encoded
        assert media.decode("json", encoded) == data

    def test_decode_nested(self, media: Media) -> None:
        body = (
            '{"movies":[{"name":"Shaun of the Dead","year":2004},'
            '{"name":"V for Vendetta","year":2005}]}'
        )
        result = media.decode("json", body)
        assert result["movies"][1] == {"name": "V for Vendetta", "year": 2005}

    def test_encode_unknown_type_is_none(self, media: Media) -> None:
        assert media.encode("badness", {"a": 1}) is None

    def test_encode_casts_records(self, media: Media) -> None:
        data = {1: Record(1, "bar"), 2: Record(2, "baz")}
        result = media.encode(Handler(encode=media.handler("json").encode), data)
        assert result == '{"1": {"id": 1, "foo": "bar"}, "2": {"id": 2, "foo": "baz"}}'


class TestForm:
    def test_decode_nested_brackets(self, media: Media) -> None:
        assert media.decode("form", FORM_ENCODED) == MOVIES

    def test_encode_nested_brackets(self) -> None:
        assert encode_form(MOVIES) == FORM_ENCODED

    def test_decode_append_brackets(self) -> None:
        assert decode_form("tags[]=a&tags[]=b&name=x") == {"tags": ["a", "b"], "name": "x"}

    def test_decode_bytes(self) -> None:
        assert decode_form(b"a=1&b=") == {"a": "1", "b": ""}

    def test_encode_scalars(self) -> None:
        assert encode_form({"on": True, "off": False, "none": None}) == "on=1&off=0&none="


class TestEmptyCodecs:
    def test_no_decoder(self, media: Media) -> None:
        media.register_type("my", "text/x-my", decode=None)
        assert media.decode("my", "Hello World") is None

    def test_no_encoder(self, media: Media) -> None:
        handler = media.register_type("empty", "empty/encode").handler
        assert media.encode(handler, []) is None

        for encoder in (None, False, ""):
            handler = media.register_type("empty", "empty/encode", encode=encoder).handler
            assert media.encode(handler, []) is None

    def test_missing_handler(self, media: Media) -> None:
        assert media.encode(None, {"foo": "bar"}) is None
        assert media.decode("xml", "<a/>") is None


class TestCustomEncoder:
    def test_csv_encoder(self, media: Media) -> None:
        def encode_csv(data: list) -> str:
            out = io.StringIO()
            csv.writer(out, lineterminator="\n").writerows(data)
            return out.getvalue()

        media.register_type("csv", "application/csv", encode=encode_csv)
        data = [
            ["John", "Doe", "123 Main St.", "Anytown, CA", "91724"],
            ["Jane", "Doe", "124 Main St.", "Anytown, CA", "91724"],
        ]
        response = media.render(Response(type="csv"), data)

        assert response.text == (
            'John,Doe,123 Main St.,"Anytown, CA",91724\n'
            'Jane,Doe,124 Main St.,"Anytown, CA",91724\n'
        )
        assert response.content_type == "application/csv; charset=UTF-8"

    def test_encoder_receives_handler_and_response(self, media: Media) -> None:
        seen = {}

        def encoder(data, handler, response):
            seen["handler"] = handler
            seen["response"] = response
            return "ok"

        media.register_type("probe", "text/x-probe", encode=encoder)
        response = media.render(Response(type="probe"), "data")
        assert response.text == "ok"
        assert isinstance(seen["handler"], Handler)
        assert seen["response"].content_type == "text/x-probe; charset=UTF-8"


class TestCast:
    def test_dataclass(self) -> None:
        assert cast(Record(1, "bar")) == {"id": 1, "foo": "bar"}

    def test_to_dict_wins(self) -> None:
        assert cast(Exportable()) == {"exported": True}

    def test_plain_object_skips_private(self) -> None:
        assert cast(Document("t")) == {"title": "t"}

    def test_scalars_untouched(self) -> None:
        assert cast("x") == "x"
        assert cast(3) == 3
        assert cast(None) is None

    def test_cast_all_one_level(self) -> None:
        assert cast_all([Record(1, "a"), "b"]) == [{"id": 1, "foo": "a"}, "b"]


class TestInvoke:
    def test_single_argument_builtin(self) -> None:
        assert invoke(len, [1, 2], "ignored") == 2

    def test_passes_as_many_as_accepted(self) -> None:
        assert invoke(lambda a, b: (a, b), 1, 2, 3) == (1, 2)

    def test_varargs_gets_everything(self) -> None:
        assert invoke(lambda *args: args, 1, 2, 3) == (1, 2, 3)
