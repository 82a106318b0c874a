def url(*segments):
    """
    Joins URI segments with single slashes, skipping empty or ``None`` segments.

    >>> url('cars', 7, 'wheels')
    '/cars/7/wheels'
    >>> url('/families/', ':family_key')
    '/families/:family_key'
    """
    parts = []
    for segment in segments:
        if segment is None:
            continue
        segment = str(segment).strip('/')
        if segment:
            parts.append(segment)
    return '/' + '/'.join(parts)


class AttributeDict(dict):
    __getattr__ = dict.__getitem__
    __setattr__ = dict.__setitem__
