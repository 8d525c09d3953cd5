"""Keyword lists for the free-text survey questions.

Entries reproduce the spellings surveyors actually typed, including Marathi
answers, typos and duplicates. Do not clean them up: they must match the
source text literally. Category order is the match priority.
"""

from gvp.classification.taxonomy import build_taxonomy
from gvp.normalization.schema import Disposer, Setting, Solution

# --- Who disposes the waste ("Who Dispose1..3") ---
DISPOSER_KEYWORDS = [
    (
        Disposer.HOUSEHOLDS,
        [
            "जवळ पास असलेले सोसायटी",
            "Banglow wale log aju baju ke",
            "House hol",
            "other",
            "Household",
            "near by peoples",
            "House holds",
            "Nearby Households",
            "जवळ पास लोकांनी टाकतात आणि बाहेरून येणारे पण",
            "Household",
            "Householdss",
            "Nearby household",
            "colony people",
            "Near by houshold",
            "Nearby Households",
            "Citizens",
            "Residental peoples",
        ],
    ),
    (
        Disposer.VENDORS,
        [
            "small stalls",
            "Market wale log kachra dalte hai",
            "Vendor",
            "Street Vendorss ",
            "Vendors and Households",
            "Vendorss",
            "Street Vendors",
            "Chai wale",
            "People and households & street vendors",
            "vendors like fish and vegetables sellers",
            " Small Stalls",
            " shop keeper",
            "Street Vendors",
            " Street vendor",
            "Vendorss",
            " street vendors",
            "Small stall",
            "Shops",
        ],
    ),
    (
        Disposer.PEOPLE_FROM_OUTSIDE,
        [
            "people from outside",
            "People From Outside",
            "outside people",
            "Outside people",
            "people from Outside",
            "People from Outside",
            "People from outside",
        ],
    ),
    (
        Disposer.PASSING_CROWD,
        [
            "आजुबाजूला असलेले लोक आणि ऑटो मधून जाणारे लोक पण येते कचरा टाकतात",
            "कचरा गाडीवरून जाणारे व्यक्ती पण टाकतात आणि सोबत जवळपास राहणारे व्यक्ती पण टाकतात",
            "जवळ पास चे लोक आणि रस्त्यावरून जाणारे लोक",
            "पर्यटक आणि बाजूचे स्टॉल वाले कचरे टाकतात",
            "Tourist",
            "जवळ पास चे लोक और रस्त्यावरून जाणाऱ्या लोक",
            "गाडीवरून येणाऱ्या लोक कचरा फेकून जातात",
            "जाण्या येणाऱ्या गाड्या वरून लोक फेकतात",
            "बाहेरून येणाऱ्या लोक कचरा टाकुण जाते",
        ],
    ),
    (
        Disposer.OTHERS,
        [
            "माहित नाही",
            "लहुजी सावळे उद्यान अंबाझरी लेक",
            "Showroom",
            "N",
            "Unknownearby HouseHolds",
        ],
    ),
]

# --- Physical setting ("In_what_setting_is_the_GVP_pre" / "Location Type") ---
SETTING_KEYWORDS = [
    (Setting.RESIDENTIAL, ["residential", "colony", "house", "society"]),
    (Setting.NALLAH_DRAIN, ["nallah", "drain"]),
    (Setting.MARKET, ["market_place", "market", "bazaar", "shop"]),
    (Setting.PLAYGROUND, ["playground", "ground", "sports", "field"]),
    (Setting.SCHOOL, ["school", "college", "institution"]),
    (Setting.OPEN_PLOT, ["open_plot", "vacant", "empty plot"]),
    (
        Setting.ROADSIDE,
        [
            "road",
            "roadside",
            "road side",
            "public path",
            "corner",
            "square",
            "front side",
            "temple",
            "collector office",
            "near sadar",
            "sem",
        ],
    ),
    (Setting.WATER_BODY, ["lake", "water", "pond", "नदी", "लेक"]),
    (Setting.OTHER, ["other", "unknown", "misc"]),
]

# --- Suggested solution ("Solution Suggested by Interviewee1..3") ---
SOLUTION_KEYWORDS = [
    (
        Solution.BINS_FACILITIES,
        [
            "Dust bin at Roadside",
            "Should Punishment Fee",
            "More Bins",
            "Bins",
            "More bins",
            "More Bins Awareness Among People",
            "Dustbins",
            "Add a board ",
            "Say to Use Of Dustbin",
            "Add Dustbin",
            " Bins Too",
            " Dustbins and Strictly Fine",
            "Bins and Facilities and strict fines",
            "Increasing of Dustbin",
        ],
    ),
    (
        Solution.TECHNOLOGY_MONITORING,
        [
            "Fine and Surveillance Camera at that Place",
            "Surveillance Camera at that Place",
            "install camera on street.",
            "Should Camera Surveillance",
        ],
    ),
    (
        Solution.STRICT_ENFORCEMENT,
        [
            "Strict Fines",
            "strictly fine for people",
            "Strictly Fine",
            "strict fines",
            "and strictly fine for people",
        ],
    ),
    (
        Solution.PUBLIC_AWARENESS,
        [
            "Awareness Program",
            "Awareness Among People",
            "More Bins Awareness Among People",
        ],
    ),
    (Solution.SANITIZATION_ROSTER, ["Should Regular Visit of Cleaner Vans"]),
    (Solution.REGULATORY_SUPPORT, ["the NMC vehicle should collect this garbage from here ."]),
    (
        Solution.EFFICIENT_COLLECTION,
        [
            "Proper schedule for collection vehicle",
            "The Place Need to be get cleaned from the road side on daily basis.",
        ],
    ),
    (Solution.NEUTRAL, ["Nothing"]),
]

DISPOSER_TAXONOMY = build_taxonomy("disposer", DISPOSER_KEYWORDS, fallback=Disposer.OTHERS)
SETTING_TAXONOMY = build_taxonomy("setting", SETTING_KEYWORDS, fallback=Setting.OTHER)
SOLUTION_TAXONOMY = build_taxonomy("solution", SOLUTION_KEYWORDS, fallback=None)
