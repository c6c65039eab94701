"""Bangladesh divisions and districts with coordinates.

Names are in Bangla, matching what farmers select in the web client.
"""

from __future__ import annotations

from amar_foshol.models.location import Coordinates, District


class LocationNotFoundError(LookupError):
    """Raised when a division or district is not in the gazetteer."""


# division -> district -> (latitude, longitude)
BANGLADESH_LOCATIONS: dict[str, dict[str, tuple[float, float]]] = {
    # Dhaka Division
    "ঢাকা": {
        "ঢাকা": (23.8103, 90.4125),
        "গাজীপুর": (23.9999, 90.4203),
        "নারায়ণগঞ্জ": (23.6238, 90.5),
        "মুন্সিগঞ্জ": (23.5513, 90.5),
        "শরীয়তপুর": (23.2156, 90.5),
        "রাজবাড়ী": (23.7574, 89.7667),
        "ফরিদপুর": (23.6122, 89.8333),
        "টাঙ্গাইল": (24.25, 89.9167),
        "মানিকগঞ্জ": (23.8636, 90.1833),
        "মাদারীপুর": (23.1667, 90.1944),
        "নরসিংদী": (23.9167, 90.7167),
        "টিপাইগড়": (23.8628, 91.3947),
        "কিশোরগঞ্জ": (24.4333, 90.7667),
    },
    # Chattogram Division
    "চট্টগ্রাম": {
        "চট্টগ্রাম": (22.3569, 91.7832),
        "কক্সবাজার": (21.4272, 92.0058),
        "খাগরাছড়ি": (22.475, 91.9833),
        "রাঙ্গামাটি": (22.6667, 92.2),
        "বান্দরবান": (22.1667, 92.2167),
        "কুমিল্লা": (23.4636, 91.1833),
        "নোয়াখালী": (22.8292, 91.0869),
        "ফেনী": (23.0167, 91.4),
        "লক্ষ্মীপুর": (22.9428, 90.8378),
        "চাঁদপুর": (23.2186, 90.6706),
    },
    # Khulna Division
    "খুলনা": {
        "খুলনা": (22.8456, 89.5403),
        "বাগেরহাট": (22.6833, 89.7833),
        "সাতক্ষীরা": (22.75, 89.0),
        "যশোর": (23.1667, 89.1667),
        "ঝিনাইদহ": (23.3667, 89.15),
        "নড়াইল": (23.1833, 89.4333),
        "পিরোজপুর": (22.5833, 89.75),
        "মেহেরপুর": (23.7667, 88.6333),
        "কুষ্টিয়া": (23.9167, 89.1167),
    },
    # Barishal Division
    "বরিশাল": {
        "বরিশাল": (22.7018, 90.3635),
        "ভোলা": (22.5833, 90.6667),
        "ঝালকাঠি": (22.6389, 90.1944),
        "পটুয়াখালী": (22.3596, 90.3281),
        "গোপালগঞ্জ": (23.0046, 90.6667),
        "বরগুনা": (22.0953, 90.1122),
    },
    # Sylhet Division
    "সিলেট": {
        "সিলেট": (24.8917, 91.8722),
        "মৌলভীবাজার": (24.4828, 91.7675),
        "সুনামগঞ্জ": (25.2656, 91.4045),
        "হবিগঞ্জ": (24.3744, 91.2756),
    },
    # Rajshahi Division
    "রাজশাহী": {
        "রাজশাহী": (24.3745, 88.6042),
        "নবাবগঞ্জ": (24.5933, 88.2667),
        "পাবনা": (23.95, 89.25),
        "বগুড়া": (24.85, 89.3667),
        "সিরাজগঞ্জ": (24.4556, 89.7),
        "নাটোর": (24.4269, 89.0),
        "চাঁপাইনবাবগঞ্জ": (24.5975, 88.2667),
        "জয়পুরহাট": (25.1667, 89.0167),
    },
    # Rangpur Division
    "রংপুর": {
        "রংপুর": (25.7439, 89.2722),
        "দিনাজপুর": (25.6217, 88.6406),
        "থানেশ্বর": (25.9333, 89.55),
        "কুড়িগ্রাম": (25.805, 89.7317),
        "লালমনিরহাট": (25.9167, 89.8333),
        "নীলফামারী": (25.4667, 89.5333),
        "গাইবান্ধা": (25.3281, 89.5356),
        "পঞ্চগড়": (26.3344, 88.5546),
    },
    # Mymensingh Division
    "ময়মনসিংহ": {
        "ময়মনসিংহ": (24.7471, 90.4203),
        "নেত্রকোনা": (24.4333, 90.7167),
        "জামালপুর": (24.9417, 89.9375),
        "শেরপুর": (25.1667, 90.0167),
    },
}


def get_divisions() -> list[str]:
    """Get all division names."""
    return list(BANGLADESH_LOCATIONS)


def get_districts(division: str) -> list[str]:
    """Get the district names of a division.

    Raises:
        LocationNotFoundError: If the division is unknown
    """
    if division not in BANGLADESH_LOCATIONS:
        raise LocationNotFoundError(f'Division "{division}" not found')
    return list(BANGLADESH_LOCATIONS[division])


def get_district(division: str, district: str) -> District:
    """Look up a district.

    Raises:
        LocationNotFoundError: If the division or district is unknown
    """
    districts = BANGLADESH_LOCATIONS.get(division)
    if districts is None:
        raise LocationNotFoundError(f'Division "{division}" not found')

    coords = districts.get(district)
    if coords is None:
        raise LocationNotFoundError(
            f'District "{district}" not found in division "{division}"'
        )

    latitude, longitude = coords
    return District(
        division=division,
        name=district,
        coordinates=Coordinates(latitude=latitude, longitude=longitude),
    )


def get_district_coordinates(division: str, district: str) -> Coordinates:
    """Get the coordinates of a district.

    Raises:
        LocationNotFoundError: If the division or district is unknown
    """
    return get_district(division, district).coordinates
