"""Business category lookup tables shared by page generation and structured data."""

DEFAULT_SCHEMA_TYPE = "LocalBusiness"

# Primary categories and common subcategories -> Schema.org types
BUSINESS_TYPE_SCHEMA_MAP: dict[str, str] = {
    "food-dining": "Restaurant",
    "shopping": "Store",
    "beauty-grooming": "BeautySalon",
    "health-medical": "MedicalClinic",
    "repairs-services": "RepairShop",
    "professional-services": "ProfessionalService",
    "activities-entertainment": "EntertainmentBusiness",
    "education-training": "EducationalOrganization",
    "creative-digital": "ProfessionalService",
    "transportation-delivery": "LocalBusiness",
    "cafe": "CafeOrCoffeeShop",
    "bar": "BarOrPub",
    "spa": "DaySpa",
    "boutique": "ClothingStore",
    "dental": "DentistOffice",
    "fitness": "GymOrFitnessCenter",
    "gym": "GymOrFitnessCenter",
    "automotive": "AutoRepair",
    "legal": "LegalService",
    "accounting": "AccountingService",
    "consulting": "ProfessionalService",
    "real estate": "RealEstateAgent",
    "home services": "HomeAndConstructionBusiness",
    "plumbing": "PlumbingService",
    "electrical": "ElectricalService",
    "landscaping": "LandscapingBusiness",
    "cleaning": "CleaningService",
    "tutoring": "EducationalOrganization",
    "venue": "EventVenue",
    "hotel": "LodgingBusiness",
}

CATEGORY_DISPLAY_NAMES: dict[str, str] = {
    "food-dining": "Food & Dining",
    "shopping": "Shopping",
    "beauty-grooming": "Beauty & Grooming",
    "health-medical": "Health & Medical",
    "repairs-services": "Repairs & Services",
    "professional-services": "Professional Services",
    "activities-entertainment": "Activities & Entertainment",
    "education-training": "Education & Training",
    "creative-digital": "Creative & Digital",
    "transportation-delivery": "Transportation & Delivery",
}

PRICE_RANGE_MAP: dict[str, str] = {
    "budget": "$",
    "mid-range": "$$",
    "premium": "$$$",
    "luxury": "$$$$",
}


def schema_type_for(business_type: str | None) -> str:
    """Map a business type or category to its Schema.org type."""
    if not business_type:
        return DEFAULT_SCHEMA_TYPE
    return BUSINESS_TYPE_SCHEMA_MAP.get(business_type.strip().lower(), DEFAULT_SCHEMA_TYPE)


def category_display_name(category: str | None) -> str:
    """Human-readable category name."""
    if not category:
        return "Local Business"
    return CATEGORY_DISPLAY_NAMES.get(category.strip().lower(), "Local Business")


def price_range_for(positioning: str | None) -> str | None:
    """Map price positioning to a Schema.org price range, None when unknown."""
    if not positioning:
        return None
    return PRICE_RANGE_MAP.get(positioning.strip().lower())
