from neuralflows.files import CSVReader, ImageRepresentation


def test_split_keeps_inner_empty_fields():
    assert CSVReader.split("a;;b", ";") == ["a", "", "b"]


def test_split_drops_trailing_empty_field():
    assert CSVReader.split("a;b;", ";") == ["a", "b"]


def test_split_empty_string():
    assert CSVReader.split("", ";") == []


def test_read_contents(tmp_path):
    path = tmp_path / "metadata.csv"
    path.write_text("img/0.png;0\nimg/1.png;1\n", encoding="utf-8")
    reader = CSVReader(path, ";")
    reader.read_contents()
    assert reader.contents == [["img/0.png", "0"], ["img/1.png", "1"]]


def test_read_contents_without_final_newline(tmp_path):
    path = tmp_path / "metadata.csv"
    path.write_text("a,b\nc,d", encoding="utf-8")
    reader = CSVReader(str(path), ",")
    reader.read_contents()
    assert reader.contents == [["a", "b"], ["c", "d"]]


def test_read_contents_only_once(tmp_path):
    path = tmp_path / "metadata.csv"
    path.write_text("x;1\n", encoding="utf-8")
    reader = CSVReader(path, ";")
    reader.read_contents()
    reader.read_contents()
    assert reader.contents == [["x", "1"]]


def test_missing_file_leaves_contents_empty(tmp_path):
    reader = CSVReader(tmp_path / "absent.csv", ";")
    reader.read_contents()
    assert reader.contents == []


def test_image_representations_from_rows(tmp_path):
    path = tmp_path / "metadata.csv"
    path.write_text("img/7.png;7\n", encoding="utf-8")
    reader = CSVReader(path, ";")
    reader.read_contents()
    images = [ImageRepresentation(*row) for row in reader.contents]
    assert images == [ImageRepresentation(path="img/7.png", value="7")]
    assert int(images[0].value) == 7