from io import BytesIO

from PIL import Image, TiffImagePlugin
import pytest

from server.imaging import (
    IFD_EXIF,
    TAG_EXPOSURE_TIME,
    TAG_FNUMBER,
    TAG_FOCAL_LENGTH,
    TAG_ISO,
    TAG_MODEL,
    ImagingError,
    extract_exif,
    format_shutter,
    optimize_image,
)


def jpeg_bytes(size=(64, 48), exif=None) -> bytes:
    buf = BytesIO()
    img = Image.new("RGB", size, (120, 160, 200))
    if exif is None:
        img.save(buf, "JPEG")
    else:
        img.save(buf, "JPEG", exif=exif)
    return buf.getvalue()


def test_format_shutter():
    assert format_shutter(0.005) == "1/200s"
    assert format_shutter(2.0) == "2s"
    assert format_shutter(None) == ""


def test_extract_exif_without_metadata():
    summary = extract_exif(jpeg_bytes())
    assert summary["camera"] == "Unknown"
    assert summary["shutter"] == ""
    assert "iso" not in summary


def test_extract_exif_reads_camera_settings():
    exif = Image.Exif()
    exif[TAG_MODEL] = "X100"
    exif[IFD_EXIF] = {
        TAG_EXPOSURE_TIME: TiffImagePlugin.IFDRational(1, 200),
        TAG_FNUMBER: TiffImagePlugin.IFDRational(28, 10),
        TAG_ISO: 400,
        TAG_FOCAL_LENGTH: TiffImagePlugin.IFDRational(35, 1),
    }

    summary = extract_exif(jpeg_bytes(exif=exif))

    assert summary["camera"] == "X100"
    assert summary["shutter"] == "1/200s"
    assert summary["aperture"] == "f/2.8"
    assert summary["iso"] == 400
    assert summary["focal"] == "35mm"


def test_extract_exif_rejects_garbage():
    with pytest.raises(ImagingError):
        extract_exif(b"not an image")


def test_optimize_bounds_width(tmp_path):
    out = optimize_image(jpeg_bytes(size=(3000, 1500)), tmp_path / "o.jpg")
    with Image.open(out) as im:
        assert im.size == (2500, 1250)
        assert im.format == "JPEG"


def test_optimize_never_enlarges_and_flattens_alpha(tmp_path):
    buf = BytesIO()
    Image.new("RGBA", (40, 30), (0, 0, 0, 0)).save(buf, "PNG")
    out = optimize_image(buf.getvalue(), tmp_path / "sub" / "o.jpg")
    with Image.open(out) as im:
        assert im.size == (40, 30)
        assert im.mode == "RGB"


def test_optimize_rejects_garbage(tmp_path):
    with pytest.raises(ImagingError):
        optimize_image(b"\x00\x01", tmp_path / "o.jpg")
