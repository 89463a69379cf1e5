from experiments import exp_1_load_balance, exp_2_path_length


if __name__ == '__main__':
    exp_1_load_balance.run()
    exp_2_path_length.run()
