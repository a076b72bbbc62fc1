# =============================================================================
# core/schemas/registry.py - Content Type Registry
# =============================================================================
# Fixed mapping from content-type (collection) name to its schema.
# Every schema declares an optional `id`; the store assigns the real one.
# =============================================================================

from __future__ import annotations

from .fields import (
    ArrayField,
    BoolField,
    ContentSchema,
    FieldSpec,
    MediaField,
    NumberField,
    ObjectField,
    StringField,
    UnionField,
    optional,
)


def _text(max_length: int) -> StringField:
    return StringField(max_length=max_length)


def _optional_text(max_length: int) -> FieldSpec:
    return optional(StringField(max_length=max_length))


_ID = optional(StringField())


def _schema(name: str, /, **fields: FieldSpec) -> ContentSchema:
    return ContentSchema(name=name, fields={"id": _ID, **fields})


def _link_item(name_length: int) -> ObjectField:
    return ObjectField(fields={"id": _ID, "name": _text(name_length), "url": _text(200)})


# -----------------------------------------------------------------------------
# Media
# -----------------------------------------------------------------------------

MEDIA = _schema(
    "media",
    alt=StringField(),
    url=StringField(),
)

# -----------------------------------------------------------------------------
# Pages
# -----------------------------------------------------------------------------

HOMEPAGE = _schema(
    "homepage",
    heroWelcomeText=_text(100),
    heroCompanyName=_text(100),
    heroText=_text(1000),
    heroButtonText=_text(50),
    heroButtonUrl=_text(200),
    heroImage=MediaField(),
    aboutUsTitle=_text(100),
    aboutUsSubTitle=_text(200),
    aboutUsText=_text(1000),
    aboutUsButtonText=_text(50),
    aboutUsButtonUrl=_text(200),
    aboutUsImage1=MediaField(),
    aboutUsImage2=MediaField(),
    aboutUsImage3=MediaField(),
    moreAboutUsTitle=_text(100),
    moreAboutUsSubTitle=_text(200),
    moreAboutUsText=_text(1000),
    moreAboutUsButtonText=_text(50),
    moreAboutUsButtonUrl=_text(200),
    moreAboutUsImage=MediaField(),
    popularTreatmentTitleSmall=_text(100),
    popularTreatmentTitleBig=_text(100),
    popularTreatmentButtonText=_text(50),
    popularTreatmentButtonUrl=_text(200),
    brandSectionTitle=_text(100),
    brandSectionSubTitle=_text(200),
    brandSectionText=_text(1000),
    brandSectionButtonText=_text(50),
    brandSectionImage=MediaField(),
)

CONTACT_PAGE = _schema(
    "contact",
    title=_text(100),
    subtitle=_text(200),
    description=_text(1000),
    openingTimesTitle=_text(100),
    mondayText=_text(50),
    mondayTime=_text(50),
    tuesdayText=_text(50),
    tuesdayTime=_text(50),
    wednesdayText=_text(50),
    wednesdayTime=_text(50),
    thursdayText=_text(50),
    thursdayTime=_text(50),
    fridayText=_text(50),
    fridayTime=_text(50),
    saturdayText=_text(50),
    saturdayTime=_text(50),
    sundayText=_text(50),
    sundayTime=_text(50),
    buttonText=_text(50),
    buttonUrl=_text(200),
    contactFormTitle=_text(100),
    contactFormSubTitle=_text(200),
    placeholderName=_text(50),
    placeholderEmail=_text(50),
    placeholderPhone=_text(50),
    placeholderMessage=_text(100),
    buttonFormText=_text(50),
    image=MediaField(),
)

# The two therapist pages share one layout
def _three_section_page(name: str) -> ContentSchema:
    return _schema(
        name,
        title=_text(100),
        subtitle=_text(200),
        description=_text(1000),
        buttonText=_optional_text(50),
        buttonUrl=_optional_text(200),
        image=MediaField(),
        titleSection2=_text(100),
        subtitleSection2=_text(200),
        descriptionSection2=_text(1000),
        image1Section2=MediaField(),
        image2Section2=MediaField(),
        image3Section2=MediaField(),
        buttonTextSection2=_optional_text(50),
        buttonUrlSection2=_optional_text(200),
        titleSection3=_text(100),
        subtitleSection3=_text(200),
        descriptionSection3=_text(1000),
        imageSection3=MediaField(),
        buttonTextSection3=_optional_text(50),
        buttonUrlSection3=_optional_text(200),
    )


MEDICAL_SKIN_EXPERT_PAGE = _three_section_page("medicalSkinExpertPage")
ORTHOMOLECULAR_THERAPIST_PAGE = _three_section_page("orthomolecularTherapistPage")

OUR_TEAM_PAGE = _schema(
    "ourTeamPage",
    title=_text(100),
    subtitle=_text(200),
    description=_text(1000),
    buttonText=_optional_text(50),
    buttonUrl=_text(200),
    image=MediaField(),
    teamTitleSmall=_text(100),
    teamTitleBig=_text(100),
    teamMembers=ArrayField(
        element=ObjectField(
            fields={
                "id": _ID,
                "name": _text(100),
                "profession": _text(100),
                "image": MediaField(),
            }
        )
    ),
    nextButtonText=_text(50),
    previousButtonText=_text(50),
)

TREATMENTS_PAGE = _schema(
    "treatmentsPage",
    title=_optional_text(100),
    subtitle=_optional_text(200),
    description=_optional_text(1000),
    buttonText=_optional_text(50),
    image=MediaField(),
    popularTreatmentTitleSmall=_text(100),
    popularTreatmentTitleBig=_text(100),
    similarTreatmentsTitleSmall=_text(100),
    similarTreatmentsTitleBig=_text(100),
    allTreatmentsText=_text(100),
    searchText=_text(50),
    bookTreatmentButtonText=_text(50),
    bookTreatmentButtonUrl=_text(200),
)

# -----------------------------------------------------------------------------
# Site chrome
# -----------------------------------------------------------------------------

FOOTER = _schema(
    "footer",
    logo=MediaField(),
    columnName=_text(100),
    columnItems=ArrayField(element=_link_item(100)),
    contactHeading=_text(100),
    addressLine1=_text(100),
    addressLine2=_text(100),
    phone1=_text(20),
    phone2=_text(20),
    extraText=_text(200),
    email=_text(100),
    facebookUrl=_text(200),
    instagramUrl=_text(200),
)

NAVIGATION = _schema(
    "navigation",
    logo=MediaField(),
    navItems=ArrayField(element=_link_item(50)),
)

# -----------------------------------------------------------------------------
# Catalogue
# -----------------------------------------------------------------------------

BRAND = _schema(
    "brand",
    name=_text(100),
    logo=MediaField(),
    companyUrl=_optional_text(200),
    heading=_optional_text(100),
    description=_text(1000),
    heading2=_optional_text(100),
    description2=_optional_text(1000),
    image=MediaField(),
    heading_section2=_optional_text(100),
    description_section2=_optional_text(1000),
    heading2_section2=_optional_text(100),
    description2_section2=_optional_text(1000),
    image_section2=optional(MediaField()),
)

TREATMENT_CATEGORY = ObjectField(fields={"id": _ID, "name": _text(100)})

TREATMENT = _schema(
    "treatment",
    slug=_text(100),
    category=UnionField(alternatives=(StringField(), TREATMENT_CATEGORY)),
    name=_text(100),
    subtitle=_text(200),
    description=_text(1000),
    isPopular=optional(BoolField()),
    duration=NumberField(),
    price=NumberField(),
    image=MediaField(),
    subtitle2=_optional_text(200),
    description2=_text(1000),
    image2=MediaField(),
    image3=optional(MediaField()),
    beforeText=_optional_text(200),
    afterText=_optional_text(200),
)


SCHEMAS: dict[str, ContentSchema] = {
    schema.name: schema
    for schema in (
        BRAND,
        CONTACT_PAGE,
        FOOTER,
        HOMEPAGE,
        MEDIA,
        MEDICAL_SKIN_EXPERT_PAGE,
        NAVIGATION,
        ORTHOMOLECULAR_THERAPIST_PAGE,
        OUR_TEAM_PAGE,
        TREATMENT,
        TREATMENTS_PAGE,
    )
}


def get_schema(name: str) -> ContentSchema | None:
    """Look up the schema registered for a collection, if any."""
    return SCHEMAS.get(name)


def schema_names() -> list[str]:
    """Registered content types, in display order."""
    return list(SCHEMAS)
