from marketing_cms.utils.localization import localize

POLICY_LOCALIZED_FIELDS = ("title", "content")


def normalize_policy(policy, lang=None):
    data = policy.to_dict()
    if lang is None:
        return data
    return localize(data, POLICY_LOCALIZED_FIELDS, lang)
