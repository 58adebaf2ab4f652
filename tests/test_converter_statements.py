from as3ts.converter import convert, convert_with_changes


def _in_function(body: str) -> str:
    return convert("function f():void { " + body + " }")


def test_for_each_becomes_for_of():
    output = _in_function("for each (var v:Item in items) { draw(v); }")
    assert output == "function f():void { for(const v of items) { draw(v); } }"


def test_counting_loop_uses_let():
    output = _in_function("for (var i:int = 0; i < n; i++) { step(i); }")
    assert "for (let i = 0; i < n; i++) { step(i); }" in output


def test_for_in_keeps_in():
    output = _in_function("for (var key:String in table) { drop(key); }")
    assert "for (const key in table) { drop(key); }" in output


def test_is_becomes_instanceof():
    assert _in_function("if (x is Foo) {}") == "function f():void { if (x instanceof Foo) {} }"


def test_descendant_and_attribute_access():
    output = _in_function("var n = xml..item; var id = node.@id;")
    assert "var n = xml.item; var id = node.id;" in output


def test_inline_xml_becomes_template_literal():
    output = _in_function("var x = <a>b</a>;")
    assert "var x = `<a>b</a>`;" in output


def test_comparison_is_not_markup():
    output = _in_function("if (a <b) c();")
    assert "`" not in output


def test_config_block_on_own_line():
    source = (
        "function f():void {\n"
        "    CONFIG::DEBUG\n"
        "    {\n"
        "        trace('dbg');\n"
        "    }\n"
        "}"
    )
    expected = (
        "function f():void {\n"
        "    // CONFIG::DEBUG\n"
        "    // {\n"
        "        trace('dbg');\n"
        "    // }\n"
        "}"
    )
    text, _, notes = convert_with_changes(source)
    assert text == expected
    assert [note.message for note in notes] == ["conditional compilation block CONFIG::DEBUG kept live"]
    assert (notes[0].line, notes[0].column) == (2, 5)


def test_config_block_brace_on_marker_line():
    source = "function f():void {\n    CONFIG::DEBUG {\n        trace();\n    }\n}"
    expected = "function f():void {\n    // CONFIG::DEBUG {\n        trace();\n    // }\n}"
    assert convert(source) == expected


def test_config_guard_in_condition():
    text, _, notes = convert_with_changes("function f():void { if (CONFIG::DEBUG) trace(1); }")
    assert text == "function f():void { if (/* CONFIG::DEBUG */ true) trace(1); }"
    assert notes[0].message == "conditional compilation guard CONFIG::DEBUG neutralized"


def test_embed_metadata_commented():
    source = 'package p {\npublic class C {\n[Embed(source="hero.png")]\npublic static var HeroPng:Class;\n}\n}'
    text, _, notes = convert_with_changes(source)
    assert '// [Embed(source="hero.png")]\npublic static HeroPng:Class;' in text
    assert notes[0].message == "[Embed] metadata commented out"


def test_multiline_embed_comments_every_line():
    source = (
        "package p {\npublic class C {\n"
        '[Embed(source="a.swf",\n'
        '    symbol="Hero")]\n'
        "public var Hero:Class;\n"
        "}\n}"
    )
    text = convert(source)
    assert '// [Embed(source="a.swf",\n    // symbol="Hero")]\npublic Hero:Class;' in text


def test_serialize_hint_commented():
    output = convert("package p {\npublic class C {\n[Serialize]\npublic var hp:int;\n}\n}")
    assert "// [Serialize]\npublic hp:number;" in output


def test_unknown_metadata_and_array_literals_untouched():
    output = convert("package p {\npublic class C {\n[Bindable]\npublic var xs:Array = [1, 2];\n}\n}")
    assert "[Bindable]\npublic xs:any[] = [1, 2];" in output


def test_include_directive_commented():
    text, _, notes = convert_with_changes('package p {\n    include "common.as";\n}')
    assert text == '\n    // include "common.as";\n'
    assert notes[0].message == "include directive commented out"
    assert notes[0].line == 2


def test_imports_removed():
    source = "package a {\n    import flash.display.Sprite;\n    import flash.events.*;\n    public class B extends Sprite {}\n}"
    assert convert(source) == "\n    \n    \n    export class B extends Sprite {}\n"


def test_use_namespace_removed():
    assert convert("package p {\n    use namespace kGAMECLASS;\n}") == "\n    \n"


def test_comments_and_strings_are_preserved():
    source = 'function f():void { // is Foo\n    var s:String = "x is y"; /* for each */ }'
    expected = 'function f():void { // is Foo\n    var s:string = "x is y"; /* for each */ }'
    assert convert(source) == expected


def test_switch_labels_are_not_annotations():
    source = "switch (k) {\n    case Kind.A: target = null; break;\n    default: Number = null;\n}"
    assert _in_function(source) == "function f():void { " + source + " }"


def test_config_guard_on_member_declaration():
    text, _, notes = convert_with_changes(
        "package p {\npublic class C {\nCONFIG::DEBUG public function dbg():void {}\n}\n}"
    )
    assert "/* CONFIG::DEBUG */ public dbg():void {}" in text
    assert notes[0].message == "conditional compilation guard CONFIG::DEBUG neutralized"
