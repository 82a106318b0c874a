from blinker import Namespace

_remote = Namespace()

before_save = _remote.signal('before-save')

after_save = _remote.signal('after-save')

save_failed = _remote.signal('save-failed')

before_create = _remote.signal('before-create')

after_create = _remote.signal('after-create')

before_update = _remote.signal('before-update')

after_update = _remote.signal('after-update')

before_destroy = _remote.signal('before-destroy')

after_destroy = _remote.signal('after-destroy')

association_fetched = _remote.signal('association-fetched')
