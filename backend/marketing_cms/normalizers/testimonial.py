from marketing_cms.utils.localization import localize

TESTIMONIAL_LOCALIZED_FIELDS = ("headline", "content")


def normalize_testimonial(testimonial, lang=None):
    data = testimonial.to_dict()
    if lang is None:
        return data
    # English lives in the bare headline/content columns
    return localize(data, TESTIMONIAL_LOCALIZED_FIELDS, lang, base_suffix=None)
