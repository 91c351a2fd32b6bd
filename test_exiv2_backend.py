"""
Integration tests for the exiv2 backend on a generated JPEG.
Skipped when the exiv2 binding is not installed.
"""

import warnings
from fractions import Fraction

import pytest

exiv2 = pytest.importorskip("exiv2")
Image = pytest.importorskip("PIL.Image")

from photometa.errors import KeyResolutionError, OpenError
from photometa.image_session import ImageFactory
from photometa.models import Namespace, TypeTag
from photometa.storage.exiv2_backend import Exiv2Backend, Exiv2TagDictionary


@pytest.fixture
def jpeg_path(tmp_path):
    path = tmp_path / "photo.jpg"
    Image.new("RGB", (16, 16), (200, 120, 40)).save(path, "JPEG")
    return str(path)


@pytest.fixture
def exiv2_factory():
    return ImageFactory(backend=Exiv2Backend())


def test_dictionary_types():
    dictionary = Exiv2TagDictionary()
    assert dictionary.exif_default_type("Exif.Image.Orientation") == TypeTag.UNSIGNED_SHORT
    assert dictionary.exif_default_type("Exif.Photo.ExposureTime") == TypeTag.UNSIGNED_RATIONAL
    assert dictionary.iptc_dataset_type("Iptc.Application2.Keywords") == TypeTag.STRING
    assert dictionary.iptc_dataset_repeatable("Iptc.Application2.Keywords") is True
    assert dictionary.xmp_key("Xmp.dc.format") == "Xmp.dc.format"


def test_dictionary_rejects_unknown_keys():
    dictionary = Exiv2TagDictionary()
    with pytest.raises(KeyResolutionError):
        dictionary.exif_default_type("Exif.Image.NoSuchTag")
    with pytest.raises(KeyResolutionError):
        dictionary.iptc_dataset_type("Iptc.Application2.NoSuchDataset")


def test_open_missing_file(exiv2_factory, tmp_path):
    with pytest.raises(OpenError):
        exiv2_factory.open_image(str(tmp_path / "missing.jpg"))


def test_write_and_read_back(exiv2_factory, jpeg_path):
    with exiv2_factory.open_image(jpeg_path) as image:
        image.read_metadata()
        image.exif_data().add("Exif.Image.Make", "SONY")
        image.exif_data().add("Exif.Image.Orientation", 6)
        image.exif_data().add("Exif.Photo.ExposureTime", Fraction(1, 125))
        assert image.iptc_data().add("Iptc.Application2.Keywords", "sunset")
        assert image.iptc_data().add("Iptc.Application2.Keywords", "beach")
        image.xmp_data().add("Xmp.photoshop.City", "Berlin")
        image.write_metadata()

    with exiv2_factory.open_image(jpeg_path) as image:
        image.read_metadata()
        exif = image.exif_data().to_dict()
        iptc = image.iptc_data().to_dict()
        xmp = image.xmp_data().to_dict()

    assert exif["Exif.Image.Make"] == "SONY"
    assert exif["Exif.Image.Orientation"] == 6
    assert exif["Exif.Photo.ExposureTime"] == Fraction(1, 125)
    assert iptc["Iptc.Application2.Keywords"] == ["sunset", "beach"]
    assert xmp["Xmp.photoshop.City"] == "Berlin"


def test_clear_and_copy(exiv2_factory, jpeg_path, tmp_path):
    other_path = str(tmp_path / "other.jpg")
    Image.new("RGB", (8, 8)).save(other_path, "JPEG")

    source = exiv2_factory.open_image(jpeg_path)
    source.read_metadata()
    source.exif_data().add("Exif.Image.Artist", "someone")

    target = exiv2_factory.open_image(other_path)
    target.read_metadata()
    source.copy_metadata_to(target)
    target.write_metadata()

    reread = exiv2_factory.open_image(other_path)
    reread.read_metadata()
    assert reread.exif_data().to_dict()["Exif.Image.Artist"] == "someone"

    reread.clear()
    reread.write_metadata()
    reread.read_metadata()
    assert list(reread.exif_data()) == []


def write_with_exiv2(path):
    """Store values the way a camera or another tool would, bypassing photometa."""
    image = exiv2.ImageFactory.open(path)
    image.readMetadata()

    exif = image.exifData()
    exif["Exif.Photo.UserComment"] = "charset=Ascii hello"
    artist = exiv2.Value.create(exiv2.TypeId.asciiString)
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", DeprecationWarning)
        artist.read(b"Caf\xe9\x00", exiv2.ByteOrder.bigEndian)
    exif.add(exiv2.ExifKey("Exif.Image.Artist"), artist)

    xmp = image.xmpData()
    subject = exiv2.Value.create(exiv2.TypeId.xmpBag)
    subject.read("sunset")
    subject.read("beach")
    xmp.add(exiv2.XmpKey("Xmp.dc.subject"), subject)
    title = exiv2.Value.create(exiv2.TypeId.langAlt)
    title.read('lang="x-default" Hello')
    title.read('lang="de" Hallo')
    xmp.add(exiv2.XmpKey("Xmp.dc.title"), title)

    image.writeMetadata()


def check_native_values(image):
    exif = image.exif_data().to_dict()
    xmp = image.xmp_data().to_dict()

    assert exif["Exif.Photo.UserComment"] == "charset=Ascii hello"
    assert exif["Exif.Image.Artist"] == "Caf\ufffd"
    assert xmp["Xmp.dc.subject"] == ["sunset", "beach"]
    assert xmp["Xmp.dc.title"] == {"x-default": "Hello", "de": "Hallo"}

    artist = [e for e in image.container(Namespace.EXIF) if e.key == "Exif.Image.Artist"]
    assert artist[0].value.components == [b"Caf\xe9"]


def test_reads_values_written_by_other_tools(exiv2_factory, jpeg_path):
    write_with_exiv2(jpeg_path)

    with exiv2_factory.open_image(jpeg_path) as image:
        image.read_metadata()
        check_native_values(image)


def test_rewrite_keeps_values_written_by_other_tools(exiv2_factory, jpeg_path):
    write_with_exiv2(jpeg_path)

    with exiv2_factory.open_image(jpeg_path) as image:
        image.read_metadata()
        image.exif_data().add("Exif.Image.Make", "SONY")
        image.write_metadata()

    with exiv2_factory.open_image(jpeg_path) as image:
        image.read_metadata()
        check_native_values(image)
        assert image.exif_data().to_dict()["Exif.Image.Make"] == "SONY"

    native = exiv2.ImageFactory.open(jpeg_path)
    native.readMetadata()
    comments = [d.toString() for d in native.exifData() if d.key() == "Exif.Photo.UserComment"]
    assert comments == ["charset=Ascii hello"]


@pytest.mark.filterwarnings("error::DeprecationWarning:photometa")
def test_read_and_write_avoid_deprecated_calls(exiv2_factory, jpeg_path):
    write_with_exiv2(jpeg_path)

    with exiv2_factory.open_image(jpeg_path) as image:
        image.read_metadata()
        image.iptc_data().add("Iptc.Application2.Keywords", "sunset")
        image.write_metadata()
