import pytest

from coalesce.core.options import AppOptions, contains_ignore_case


def test_yaml_keys_are_camel_case_and_unknown_keys_ignored():
    opts = AppOptions.model_validate({
        "outputFilePath": "out.md",
        "sourceDirectoryPaths": ["./src"],
        "excludeDirectoryNames": [".git"],
        "somethingElse": 42,
    })

    assert opts.output_file_path == "out.md"
    assert opts.source_directory_paths == ["./src"]
    assert opts.exclude_directory_names == [".git"]
    assert not hasattr(opts, "somethingElse")


def test_missing_and_null_keys_become_empty():
    opts = AppOptions.model_validate({"outputFilePath": None, "includeExtensions": None})

    assert opts.output_file_path == ""
    assert opts.include_extensions == []
    assert opts.exclude_extensions == []
    assert opts.path_only_extensions == []
    assert opts.exclude_file_names == []


def test_extensions_get_leading_dot_and_blank_entries_are_dropped():
    opts = AppOptions(include_extensions=["md", " .py ", "", ".CS"])

    assert opts.include_extensions == [".md", ".py", ".CS"]


def test_valid_source_directories_are_read_only_and_set_once():
    opts = AppOptions(source_directory_paths=["a"])
    assert opts.valid_source_directory_paths == []

    opts.set_valid_source_directories(["/abs/a"])
    assert opts.valid_source_directory_paths == ["/abs/a"]

    # returned list is a copy
    opts.valid_source_directory_paths.append("/other")
    assert opts.valid_source_directory_paths == ["/abs/a"]

    with pytest.raises(RuntimeError):
        opts.set_valid_source_directories(["/abs/b"])


def test_valid_source_directories_never_serialized():
    opts = AppOptions(output_file_path="x.md")
    opts.set_valid_source_directories(["/abs"])

    dumped = opts.model_dump(by_alias=True)
    assert "validSourceDirectoryPaths" not in dumped
    assert dumped["outputFilePath"] == "x.md"


def test_contains_ignore_case():
    assert contains_ignore_case(["Node_Modules"], "node_modules")
    assert not contains_ignore_case(["bin"], "obj")
