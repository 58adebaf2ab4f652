from as3ts.config import ConvertConfig
from as3ts.converter import convert
from as3ts.typemap import DEFAULT_TYPE_MAP, build_type_map


def test_builtin_types_are_mapped():
    for legacy, modern in DEFAULT_TYPE_MAP.items():
        assert convert(f"var x:{legacy};") == f"var x:{modern};"


def test_number_family_collapses_to_number():
    assert convert("var a:int, b:uint, c:Number;") == "var a:number, b:number, c:number;"


def test_untyped_wildcard_in_signature():
    source = "function f(a:*, ...rest):* { return a; }"
    assert convert(source) == "function f(a:any, ...rest):any { return a; }"


def test_user_types_pass_through():
    assert convert("var hero:Hero;") == "var hero:Hero;"
    assert convert("var s:flash.display.Sprite;") == "var s:flash.display.Sprite;"


def test_nested_vector():
    assert convert("var grid:Vector.<Vector.<int>>;") == "var grid:Array<Array<number>>;"


def test_vector_constructor_in_function_body():
    source = "function f():void { var v = new Vector.<String>(); }"
    assert convert(source) == "function f():void { var v = new Array<string>(); }"


def test_null_initializer_widens_type():
    assert convert("var target:Enemy = null;") == "var target:Enemy | null = null;"
    assert convert("var n:int = null;") == "var n:number | null = null;"


def test_null_initializer_on_function_type_is_parenthesized():
    assert convert("var cb:Function = null;") == "var cb:(() => void) | null = null;"


def test_null_initializer_after_vector():
    assert convert("var list:Vector.<String> = null;") == "var list:Array<string> | null = null;"


def test_non_null_initializer_left_alone():
    assert convert("var n:int = 5;") == "var n:number = 5;"


def test_call_after_colon_is_not_a_type():
    source = "var o = {key: String(v)};"
    assert convert(source) == source


def test_custom_type_map():
    config = ConvertConfig(type_map=build_type_map({"Dictionary": "Map<any, any>", "int": "bigint"}))
    assert convert("var d:Dictionary; var i:int;", config) == "var d:Map<any, any>; var i:bigint;"


def test_builtin_static_member_in_ternary_is_not_a_type():
    source = "function f():void { var m = ok ? 1 : Number.MAX_VALUE; var s = ok ? '' : String.fromCharCode(65); }"
    assert convert(source) == source


def test_builtin_static_member_in_object_literal_is_not_a_type():
    source = "function f():void { var o = {max: int.MAX_VALUE, min: uint.MIN_VALUE}; }"
    assert convert(source) == source
